"""
Posts routes for CRUD operations on user posts.
"""
from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session
from typing import Optional

from ..database import MAX_ROW_ID, get_db
from ..hashtags import extract_hashtags, serialize_hashtags, deserialize_hashtags
from ..logging_config import api_logger
from ..models.comment import Comment
from ..models.post import Post
from ..models.user import User
from ..auth import get_current_user, get_required_user
from ..pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, newest_first_page
from ..responses import success, created, updated, deleted, not_found, forbidden
from ..schemas.posts import PostCreate, PostUpdate

router = APIRouter(prefix="/api/posts", tags=["posts"])

# Comments embedded in each post of a listing
COMMENT_PREVIEW_SIZE = 3


def author_to_dict(user: User) -> dict:
    """Public summary of a user embedded in posts and comments."""
    return {
        "id": user.id,
        "username": user.username,
        "display_name": user.display_name,
        "avatar": user.avatar,
    }


def comment_to_dict(comment: Comment) -> dict:
    return {
        "id": comment.id,
        "post_id": comment.post_id,
        "content": comment.content,
        "user": author_to_dict(comment.user),
        "created_at": comment.created_at.isoformat(),
    }


def post_to_dict(post: Post, viewer: Optional[User] = None, comment_limit: Optional[int] = COMMENT_PREVIEW_SIZE) -> dict:
    """Convert a Post to its response shape with author, likes, comments and counts.

    comment_limit=None embeds every comment.
    """
    comments = sorted(post.comments, key=lambda c: (c.created_at, c.id), reverse=True)
    if comment_limit is not None:
        comments = comments[:comment_limit]
    liked_by = [like.user_id for like in post.likes]

    return {
        "id": post.id,
        "content": post.content,
        "hashtags": deserialize_hashtags(post.hashtags),
        "author": author_to_dict(post.author),
        "likes": [{"user_id": user_id} for user_id in liked_by],
        "comments": [comment_to_dict(c) for c in comments],
        "counts": {
            "likes": len(post.likes),
            "comments": len(post.comments),
        },
        "is_liked": viewer is not None and viewer.id in liked_by,
        "created_at": post.created_at.isoformat(),
        "updated_at": post.updated_at.isoformat() if post.updated_at else None,
    }


def get_post_or_404(db: Session, post_id: int) -> Post:
    post = db.get(Post, post_id)
    if not post:
        not_found("Post")
    return post


def get_owned_post(db: Session, post_id: int, user: User) -> Post:
    """Load a post the user is allowed to modify."""
    post = get_post_or_404(db, post_id)
    if post.author_id != user.id:
        forbidden("Unauthorized")
    return post


def _stored_hashtags(content: str) -> Optional[str]:
    hashtags = extract_hashtags(content)
    return serialize_hashtags(hashtags) if hashtags else None


@router.get("")
def get_posts(
    cursor: Optional[int] = Query(default=None, ge=1, le=MAX_ROW_ID),
    limit: int = Query(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    author_id: Optional[int] = Query(default=None, alias="authorId", ge=1, le=MAX_ROW_ID),
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_current_user),
):
    """Get posts newest first, optionally by one author, paged by cursor."""
    query = db.query(Post)
    if author_id is not None:
        query = query.filter(Post.author_id == author_id)

    posts = newest_first_page(db, query, Post, cursor, limit)
    return success([post_to_dict(p, current_user) for p in posts])


@router.get("/{post_id}")
def get_post(
    post_id: int = Path(ge=1, le=MAX_ROW_ID),
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_current_user),
):
    """Get a single post with all of its comments and likes."""
    post = get_post_or_404(db, post_id)
    return success(post_to_dict(post, current_user, comment_limit=None))


@router.post("")
def create_post(
    post_data: PostCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_required_user),
):
    """Create a new post for the current user."""
    post = Post(
        author_id=current_user.id,
        content=post_data.content,
        hashtags=_stored_hashtags(post_data.content),
    )
    db.add(post)
    db.commit()
    db.refresh(post)

    api_logger.info("Post created", post_id=post.id, user_id=current_user.id)
    return created(post_to_dict(post, current_user), "Post created successfully")


@router.put("/{post_id}")
def update_post(
    post_update: PostUpdate,
    post_id: int = Path(ge=1, le=MAX_ROW_ID),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_required_user),
):
    """Replace a post's content (author only); hashtags are re-extracted."""
    post = get_owned_post(db, post_id, current_user)

    post.content = post_update.content
    post.hashtags = _stored_hashtags(post_update.content)
    db.commit()
    db.refresh(post)

    return updated(post_to_dict(post, current_user, comment_limit=None), "Post updated successfully")


@router.delete("/{post_id}")
def delete_post(
    post_id: int = Path(ge=1, le=MAX_ROW_ID),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_required_user),
):
    """Delete a post (author only) along with its likes and comments."""
    post = get_owned_post(db, post_id, current_user)

    db.delete(post)
    db.commit()

    api_logger.info("Post deleted", post_id=post_id, user_id=current_user.id)
    return deleted("Post deleted successfully")
