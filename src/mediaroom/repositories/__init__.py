"""Repositories wrapping SQLAlchemy queries for each aggregate."""

from .comment_repo import CommentRepository
from .content_repo import ContentRepository, SortMode
from .follow_repo import FollowRepository
from .notification_repo import NotificationRepository
from .user_repo import UserRepository

__all__ = [
    "CommentRepository",
    "ContentRepository",
    "FollowRepository",
    "NotificationRepository",
    "SortMode",
    "UserRepository",
]
