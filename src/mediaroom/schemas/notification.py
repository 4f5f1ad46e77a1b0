"""Notification Pydantic schemas."""
from __future__ import annotations

from datetime import datetime

from .common import ApiModel


class NotificationOut(ApiModel):
    """Notification with the acting user's identity."""

    id: int
    type: str
    reference_id: int | None
    is_read: bool
    created_at: datetime
    actor_id: int
    actor_username: str
    actor_display_name: str | None
    actor_avatar_url: str | None


class MarkAllReadOut(ApiModel):
    success: bool = True
    updated: int
