"""
Pydantic schemas for API request/response models.

Responses are rendered in camelCase; requests accept camelCase or snake_case.
"""

from .comment import CommentCreate, CommentOut
from .common import (
    AUTH_ERROR_RESPONSES,
    ERROR_RESPONSES,
    ApiModel,
    CountResponse,
    ErrorResponse,
    SuccessResponse,
)
from .content import ContentCreate, ContentOut, FeedPageOut, LikeRequest, LikeResponse
from .notification import MarkAllReadOut, NotificationOut
from .search import SearchResponse, SearchResultOut
from .user import (
    FollowEntryOut,
    FollowRequest,
    FollowStatusOut,
    ProfileOut,
    StatsOut,
    UserCreate,
    UserOut,
    UserSummaryOut,
)

__all__ = [
    "AUTH_ERROR_RESPONSES", "ERROR_RESPONSES",
    "ApiModel", "CountResponse", "ErrorResponse", "SuccessResponse",
    "CommentCreate", "CommentOut",
    "ContentCreate", "ContentOut", "FeedPageOut", "LikeRequest", "LikeResponse",
    "MarkAllReadOut", "NotificationOut",
    "SearchResponse", "SearchResultOut",
    "FollowEntryOut", "FollowRequest", "FollowStatusOut", "ProfileOut", "StatsOut",
    "UserCreate", "UserOut", "UserSummaryOut",
]
