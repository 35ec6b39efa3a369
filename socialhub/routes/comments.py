"""
Comment routes for listing and adding comments on posts.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from ..database import MAX_ROW_ID, get_db
from ..logging_config import api_logger
from ..models.comment import Comment
from ..models.user import User
from ..auth import get_required_user
from ..notifications import notify_post_owner
from ..pagination import MAX_PAGE_SIZE, newest_first_page
from ..responses import success, created, require
from ..schemas.comments import CommentCreate
from .posts import comment_to_dict, get_post_or_404

router = APIRouter(prefix="/api/comments", tags=["comments"])


@router.get("")
def get_comments(
    post_id: Optional[int] = Query(default=None, alias="postId", ge=1, le=MAX_ROW_ID),
    cursor: Optional[int] = Query(default=None, ge=1, le=MAX_ROW_ID),
    limit: int = Query(default=20, ge=1, le=MAX_PAGE_SIZE),
    db: Session = Depends(get_db),
):
    """Get a post's comments newest first, paged by cursor."""
    require(post_id, "Post ID")
    get_post_or_404(db, post_id)

    query = db.query(Comment).filter(Comment.post_id == post_id)
    comments = newest_first_page(db, query, Comment, cursor, limit)
    return success([comment_to_dict(c) for c in comments])


@router.post("")
def create_comment(
    comment_data: CommentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_required_user),
):
    """Add a comment to a post and notify the post's author."""
    post = get_post_or_404(db, comment_data.post_id)

    comment = Comment(
        user_id=current_user.id,
        post_id=post.id,
        content=comment_data.content,
    )
    db.add(comment)
    notify_post_owner(db, post, current_user, "COMMENT")
    db.commit()
    db.refresh(comment)

    api_logger.info("Comment added", comment_id=comment.id, post_id=post.id, user_id=current_user.id)
    return created(comment_to_dict(comment), "Comment added successfully")
