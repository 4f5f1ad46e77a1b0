"""Model capturing follower relationships between users."""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Integer
from sqlalchemy.orm import Mapped, mapped_column

from mediaroom.db.session import Base
from mediaroom.db.time import utcnow


class FollowEdge(Base):
    """A single follower -> followed edge.

    Edges are created and destroyed by the follow toggle and never updated.
    """

    __tablename__ = "follow_edge"
    __table_args__ = (
        CheckConstraint("follower_id <> followed_id", name="ck_follow_edge_not_self"),
        Index("ix_follow_edge_followed_id", "followed_id"),
    )

    # Composite primary key allows at most one edge per ordered pair.
    follower_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("app_user.id", ondelete="CASCADE"),
        primary_key=True,
    )
    followed_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("app_user.id", ondelete="CASCADE"),
        primary_key=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
