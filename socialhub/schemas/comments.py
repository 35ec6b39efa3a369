from pydantic import BaseModel, Field, field_validator

from ..database import MAX_ROW_ID
from .posts import clean_content


class CommentCreate(BaseModel):
    post_id: int = Field(alias="postId", ge=1, le=MAX_ROW_ID)
    content: str

    class Config:
        populate_by_name = True

    @field_validator("content")
    @classmethod
    def check_content(cls, value: str) -> str:
        return clean_content(value)
