from pydantic import BaseModel, field_validator

from ..config import get_settings


def clean_content(value: str, max_length: int = None) -> str:
    """Trim content and enforce that it is non-empty and within max_length."""
    value = value.strip()
    if not value:
        raise ValueError("Content is required")
    if max_length is not None and len(value) > max_length:
        raise ValueError(f"Content must be {max_length} characters or fewer")
    return value


class PostCreate(BaseModel):
    content: str

    @field_validator("content")
    @classmethod
    def check_content(cls, value: str) -> str:
        return clean_content(value, get_settings().post_max_length)


class PostUpdate(PostCreate):
    pass
