"""Data access helpers for follow edges."""
from __future__ import annotations

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from mediaroom.models import FollowEdge, User
from mediaroom.repositories.records import FollowEntry, from_row

__all__ = ["FollowRepository"]


class FollowRepository:
    """Edge-table queries for the social graph."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def exists(self, follower_id: int, followed_id: int) -> bool:
        """Return True if ``follower_id`` follows ``followed_id``."""
        return self.session.execute(
            select(FollowEdge.follower_id).where(
                FollowEdge.follower_id == follower_id,
                FollowEdge.followed_id == followed_id,
            )
        ).first() is not None

    def add(self, follower_id: int, followed_id: int) -> FollowEdge:
        """Insert an edge; the composite primary key rejects duplicates."""
        edge = FollowEdge(follower_id=follower_id, followed_id=followed_id)
        self.session.add(edge)
        self.session.flush()
        return edge

    def remove(self, follower_id: int, followed_id: int) -> bool:
        """Delete an edge, returning False if there was none."""
        result = self.session.execute(
            delete(FollowEdge).where(
                FollowEdge.follower_id == follower_id,
                FollowEdge.followed_id == followed_id,
            )
        )
        return bool(result.rowcount)

    def followers_of(self, user_id: int) -> list[FollowEntry]:
        """Return users following ``user_id``, most recent edge first."""
        stmt = (
            self._entry_select()
            .join(FollowEdge, FollowEdge.follower_id == User.id)
            .where(FollowEdge.followed_id == user_id)
            .order_by(FollowEdge.created_at.desc(), User.id.desc())
        )
        return [from_row(FollowEntry, row) for row in self.session.execute(stmt).all()]

    def followed_by(self, user_id: int) -> list[FollowEntry]:
        """Return users that ``user_id`` follows, most recent edge first."""
        stmt = (
            self._entry_select()
            .join(FollowEdge, FollowEdge.followed_id == User.id)
            .where(FollowEdge.follower_id == user_id)
            .order_by(FollowEdge.created_at.desc(), User.id.desc())
        )
        return [from_row(FollowEntry, row) for row in self.session.execute(stmt).all()]

    def count_followers(self, user_id: int) -> int:
        return int(
            self.session.execute(
                select(func.count()).select_from(FollowEdge).where(FollowEdge.followed_id == user_id)
            ).scalar_one()
        )

    def count_following(self, user_id: int) -> int:
        return int(
            self.session.execute(
                select(func.count()).select_from(FollowEdge).where(FollowEdge.follower_id == user_id)
            ).scalar_one()
        )

    @staticmethod
    def _entry_select():
        return select(
            User.id,
            User.username,
            User.display_name,
            User.avatar_url,
            FollowEdge.created_at.label("followed_at"),
        ).select_from(User)
