from .auth import router as auth_router
from .posts import router as posts_router
from .comments import router as comments_router
from .likes import router as likes_router
from .search import router as search_router
from .users import router as users_router
from .ai import router as ai_router

__all__ = [
    "auth_router",
    "posts_router",
    "comments_router",
    "likes_router",
    "search_router",
    "users_router",
    "ai_router",
]
