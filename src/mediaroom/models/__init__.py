"""SQLAlchemy models for the MediaRoom application."""

from .comment import Comment
from .content import Content, ContentKind
from .follow import FollowEdge
from .notification import Notification, NotificationType
from .user import User

__all__ = [
    "Comment",
    "Content", "ContentKind",
    "FollowEdge",
    "Notification", "NotificationType",
    "User",
]
