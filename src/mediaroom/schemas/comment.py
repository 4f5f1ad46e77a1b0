"""Comment Pydantic schemas."""
from __future__ import annotations

from datetime import datetime

from .common import ApiModel


class CommentCreate(ApiModel):
    # Length and blank checks happen in the interaction service after stripping.
    body: str


class CommentOut(ApiModel):
    id: int
    content_id: int
    author_id: int
    body: str
    created_at: datetime
    author_username: str
    author_display_name: str | None
    author_avatar_url: str | None
