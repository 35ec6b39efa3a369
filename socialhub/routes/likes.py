"""
Like routes: like and unlike a post.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..database import get_db
from ..models.like import Like
from ..models.user import User
from ..auth import get_required_user
from ..notifications import notify_post_owner
from ..responses import success, conflict, not_found
from ..schemas.likes import LikeRequest
from .posts import get_post_or_404

router = APIRouter(prefix="/api/likes", tags=["likes"])


def _like_summary(db: Session, post_id: int, liked: bool) -> dict:
    return {
        "post_id": post_id,
        "liked": liked,
        "like_count": db.query(Like).filter(Like.post_id == post_id).count(),
    }


@router.post("")
def like_post(
    like_request: LikeRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_required_user),
):
    """Like a post; liking it a second time is a conflict."""
    post = get_post_or_404(db, like_request.post_id)

    db.add(Like(user_id=current_user.id, post_id=post.id))
    try:
        db.flush()
    except IntegrityError:
        db.rollback()
        conflict("Post already liked")

    notify_post_owner(db, post, current_user, "LIKE")
    db.commit()

    return success(_like_summary(db, post.id, True), "Post liked successfully")


@router.delete("")
def unlike_post(
    like_request: LikeRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_required_user),
):
    """Remove the current user's like from a post."""
    like = db.get(Like, (current_user.id, like_request.post_id))
    if not like:
        not_found("Like")

    db.delete(like)
    db.commit()

    return success(_like_summary(db, like_request.post_id, False), "Post unliked successfully")
