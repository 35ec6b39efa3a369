from pydantic import BaseModel, Field

from ..database import MAX_ROW_ID


class LikeRequest(BaseModel):
    post_id: int = Field(alias="postId", ge=1, le=MAX_ROW_ID)

    class Config:
        populate_by_name = True
