"""Model for notifications produced by interaction fan-out."""

from __future__ import annotations

import enum
from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from mediaroom.db.session import Base
from mediaroom.db.time import utcnow


class NotificationType(str, enum.Enum):
    """Interaction events that produce a notification."""

    FOLLOW = "follow"
    LIKE = "like"
    COMMENT = "comment"


class Notification(Base):
    """Notification addressed to ``recipient_id`` about an action by ``actor_id``."""

    __tablename__ = "notification"
    __table_args__ = (
        CheckConstraint("type IN ('follow', 'like', 'comment')", name="ck_notification_type"),
        CheckConstraint("recipient_id <> actor_id", name="ck_notification_not_self"),
        Index("ix_notification_recipient_created", "recipient_id", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    recipient_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("app_user.id", ondelete="CASCADE"),
        nullable=False,
    )
    actor_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("app_user.id", ondelete="CASCADE"),
        nullable=False,
    )
    type: Mapped[str] = mapped_column(String(16), nullable=False)
    # Content id for like/comment; null for follow.
    reference_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    is_read: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
