"""User and social graph Pydantic schemas."""
from __future__ import annotations

from datetime import datetime

from pydantic import Field

from .common import ApiModel
from .content import FeedPageOut


class UserCreate(ApiModel):
    """Schema for registering a user."""

    username: str = Field(..., min_length=1, max_length=64)
    display_name: str | None = Field(None, max_length=128)
    avatar_url: str | None = None
    bio: str | None = None


class UserSummaryOut(ApiModel):
    """Identity fields embedded in other responses."""

    id: int
    username: str
    display_name: str | None
    avatar_url: str | None


class UserOut(UserSummaryOut):
    bio: str | None
    created_at: datetime


class FollowEntryOut(UserSummaryOut):
    followed_at: datetime


class FollowRequest(ApiModel):
    """Optional explicit follower id; must match the authenticated user."""

    follower_id: int | None = None


class FollowStatusOut(ApiModel):
    is_following: bool


class StatsOut(ApiModel):
    followers_count: int
    following_count: int


class ProfileOut(ApiModel):
    """Public profile with follow totals and the first page of authored media."""

    user: UserOut
    stats: StatsOut
    is_following: bool | None = None
    media: FeedPageOut
