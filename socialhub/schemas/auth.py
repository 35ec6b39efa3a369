from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional
from datetime import datetime
import re

USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_]{3,30}$")


class RegisterRequest(BaseModel):
    email: EmailStr
    username: str
    display_name: str = Field(alias="displayName")
    password: str = Field(min_length=8, max_length=72)  # bcrypt only hashes the first 72 bytes
    bio: Optional[str] = Field(default=None, max_length=160)

    class Config:
        populate_by_name = True

    @field_validator("username")
    @classmethod
    def check_username(cls, value: str) -> str:
        value = value.strip()
        if not USERNAME_PATTERN.match(value):
            raise ValueError("Username must be 3-30 letters, digits or underscores")
        return value

    @field_validator("display_name")
    @classmethod
    def check_display_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Display name is required")
        if len(value) > 100:
            raise ValueError("Display name must be 100 characters or fewer")
        return value

    @field_validator("bio")
    @classmethod
    def blank_bio_is_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        return value.strip()


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)


class UserResponse(BaseModel):
    id: int
    email: str
    username: str
    display_name: str
    bio: Optional[str] = None
    avatar: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class AuthResponse(BaseModel):
    user: UserResponse
    token: str
