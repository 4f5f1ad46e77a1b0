"""Content, feed and like Pydantic schemas."""
from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import Field, model_validator

from .common import ApiModel


class ContentCreate(ApiModel):
    """Schema for creating content.

    Media is either uploaded inline as base64 (``file_b64`` with ``filename``
    and ``content_type``) or referenced by an already hosted ``media_url``.
    """

    kind: Literal["photo", "video", "text"]
    title: str = Field(..., min_length=1)
    description: str | None = None
    media_url: str | None = None
    file_b64: str | None = None
    filename: str | None = None
    content_type: str | None = None
    thumbnail_b64: str | None = None

    @model_validator(mode="after")
    def _check_media_source(self) -> ContentCreate:
        if self.file_b64 is not None:
            if self.media_url is not None:
                raise ValueError("Provide either file_b64 or media_url, not both")
            if not self.filename or not self.content_type:
                raise ValueError("filename and content_type are required with file_b64")
        return self


class ContentOut(ApiModel):
    """Content row annotated with counters and author identity."""

    id: int
    author_id: int
    kind: str
    media_url: str | None
    thumbnail_url: str | None
    title: str
    description: str | None
    like_count: int
    view_count: int
    comment_count: int
    created_at: datetime
    author_username: str
    author_display_name: str | None
    author_avatar_url: str | None


class FeedPageOut(ApiModel):
    posts: list[ContentOut]
    next_cursor: str | None
    has_more: bool


class LikeRequest(ApiModel):
    action: Literal["like", "unlike"]


class LikeResponse(ApiModel):
    success: bool = True
    action: Literal["liked", "unliked"]
    like_count: int
