from .auth import RegisterRequest, LoginRequest, UserResponse, AuthResponse
from .posts import PostCreate, PostUpdate
from .comments import CommentCreate
from .likes import LikeRequest
from .ai import GenerateContentRequest, GeneratedContent

__all__ = [
    "RegisterRequest", "LoginRequest", "UserResponse", "AuthResponse",
    "PostCreate", "PostUpdate",
    "CommentCreate",
    "LikeRequest",
    "GenerateContentRequest", "GeneratedContent",
]
