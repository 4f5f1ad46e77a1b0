"""SQLAlchemy models for uploaded content and its denormalized counters."""

from __future__ import annotations

import enum
from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from mediaroom.db.session import Base
from mediaroom.db.time import utcnow


class ContentKind(str, enum.Enum):
    """Kinds of content a user can publish."""

    PHOTO = "photo"
    VIDEO = "video"
    TEXT = "text"


class Content(Base):
    """Primary content entity produced by users.

    ``id`` is assigned monotonically at creation and doubles as the feed
    cursor. ``like_count`` and ``view_count`` are derived counters owned by the
    counter store; they never record who liked what.
    """

    __tablename__ = "content"
    __table_args__ = (
        CheckConstraint("kind IN ('photo', 'video', 'text')", name="ck_content_kind"),
        CheckConstraint("like_count >= 0", name="ck_content_like_count"),
        CheckConstraint("view_count >= 0", name="ck_content_view_count"),
        Index("ix_content_author_id", "author_id"),
        Index("ix_content_like_count_id", "like_count", "id"),
        Index("ix_content_view_count_id", "view_count", "id"),
        Index("ix_content_created_at_id", "created_at", "id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    author_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("app_user.id", ondelete="CASCADE"),
        nullable=False,
    )
    kind: Mapped[str] = mapped_column(String(16), nullable=False)
    # Blob store URLs are stored verbatim; text posts carry none.
    media_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    thumbnail_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    like_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    view_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
