"""
User profile routes.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from ..database import get_db
from ..models.follow import Follow
from ..models.post import Post
from ..models.user import User
from ..auth import get_current_user
from ..pagination import MAX_PAGE_SIZE
from ..responses import success, not_found
from .posts import post_to_dict

router = APIRouter(prefix="/api/users", tags=["users"])


def profile_to_dict(user: User, db: Session, viewer: Optional[User]) -> dict:
    profile = {
        "id": user.id,
        "username": user.username,
        "display_name": user.display_name,
        "bio": user.bio,
        "avatar": user.avatar,
        "created_at": user.created_at.isoformat(),
        "counts": {
            "posts": db.query(Post).filter(Post.author_id == user.id).count(),
            "followers": db.query(Follow).filter(Follow.following_id == user.id).count(),
            "following": db.query(Follow).filter(Follow.follower_id == user.id).count(),
        },
    }
    # Email is only shown to its owner.
    if viewer is not None and viewer.id == user.id:
        profile["email"] = user.email
    return profile


@router.get("/{username}")
def get_profile(
    username: str,
    limit: int = Query(default=20, ge=1, le=MAX_PAGE_SIZE),
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_current_user),
):
    """Get a user's profile, counts and most recent posts."""
    user = db.query(User).filter(User.username == username).first()
    if not user:
        not_found("User")

    posts = db.query(Post).filter(
        Post.author_id == user.id
    ).order_by(Post.created_at.desc(), Post.id.desc()).limit(limit).all()

    return success({
        "user": profile_to_dict(user, db, current_user),
        "posts": [post_to_dict(p, current_user) for p in posts],
    })
