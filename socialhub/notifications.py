"""
Engagement notifications for post owners.
"""
from typing import Optional

from sqlalchemy.orm import Session

from .models import Notification, Post, User

NOTIFICATION_MESSAGES = {
    "LIKE": "liked your post",
    "COMMENT": "commented on your post",
}


def notify_post_owner(db: Session, post: Post, actor: User, kind: str) -> Optional[Notification]:
    """Queue a notification for the post's author in the caller's transaction.

    Returns None without writing anything when the actor owns the post.
    """
    if post.author_id == actor.id:
        return None

    notification = Notification(
        user_id=post.author_id,
        type=kind,
        message=f"{actor.display_name or actor.username} {NOTIFICATION_MESSAGES[kind]}",
    )
    db.add(notification)
    return notification
