"""
Search routes for finding posts by content and hashtags.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy import or_
from sqlalchemy.orm import Session
from typing import Optional

from ..database import get_db
from ..models.post import Post
from ..models.user import User
from ..auth import get_current_user
from ..pagination import MAX_PAGE_SIZE
from ..responses import success
from .posts import post_to_dict

router = APIRouter(prefix="/api/search", tags=["search"])


def _like_pattern(term: str) -> str:
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


@router.get("")
def search(
    q: Optional[str] = None,
    limit: int = Query(default=20, ge=1, le=MAX_PAGE_SIZE),
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_current_user),
):
    """Case-insensitive substring search over post content and hashtags."""
    if not q or not q.strip():
        return success([])

    pattern = _like_pattern(q.strip().lower())
    posts = db.query(Post).filter(
        or_(
            Post.content.ilike(pattern, escape="\\"),
            Post.hashtags.ilike(pattern, escape="\\"),
        )
    ).order_by(Post.created_at.desc(), Post.id.desc()).limit(limit).all()

    return success([post_to_dict(p, current_user) for p in posts])
