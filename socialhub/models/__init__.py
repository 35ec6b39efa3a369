from .user import User
from .post import Post
from .like import Like
from .comment import Comment
from .notification import Notification
from .follow import Follow

__all__ = [
    "User",
    "Post",
    "Like",
    "Comment",
    "Notification",
    "Follow",
]
