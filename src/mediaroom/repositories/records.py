"""Read-side records returned by repository queries.

Every "with details" query has its own record type so callers never deal
with loosely shaped joined rows.
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
from datetime import datetime
from typing import Any, TypeVar

RecordT = TypeVar("RecordT")


def from_row(record_type: type[RecordT], row: Any) -> RecordT:
    """Build ``record_type`` from a SQLAlchemy row using its column labels."""
    mapping: Mapping[str, Any] = row._mapping
    return record_type(**{f.name: mapping[f.name] for f in fields(record_type)})  # type: ignore[arg-type]


@dataclass(frozen=True)
class UserSummary:
    """Identity fields joined into other read models."""

    id: int
    username: str
    display_name: str | None
    avatar_url: str | None


@dataclass(frozen=True)
class FollowEntry:
    """A user on the other end of a follow edge."""

    id: int
    username: str
    display_name: str | None
    avatar_url: str | None
    followed_at: datetime


@dataclass(frozen=True)
class ContentDetail:
    """Content row annotated with live counters and its author's identity."""

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


@dataclass(frozen=True)
class CommentDetail:
    """Comment joined with its author's identity."""

    id: int
    content_id: int
    author_id: int
    body: str
    created_at: datetime
    author_username: str
    author_display_name: str | None
    author_avatar_url: str | None


@dataclass(frozen=True)
class NotificationDetail:
    """Notification joined with the acting user's identity."""

    id: int
    recipient_id: int
    actor_id: int
    type: str
    reference_id: int | None
    is_read: bool
    created_at: datetime
    actor_username: str
    actor_display_name: str | None
    actor_avatar_url: str | None
