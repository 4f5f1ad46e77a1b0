"""Data access helpers for user identities."""
from __future__ import annotations

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from mediaroom.models import User
from mediaroom.repositories.content_repo import escape_like
from mediaroom.repositories.records import UserSummary, from_row

__all__ = ["UserRepository"]


class UserRepository:
    """Lookups over identity rows."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_id(self, user_id: int) -> User | None:
        return self.session.get(User, user_id)

    def get_by_username(self, username: str) -> User | None:
        return self.session.execute(
            select(User).where(User.username == username)
        ).scalars().first()

    def exists(self, user_id: int) -> bool:
        return self.session.execute(
            select(User.id).where(User.id == user_id)
        ).first() is not None

    def search(self, term: str, limit: int) -> list[UserSummary]:
        """Return users whose username or display name contains ``term``."""
        pattern = f"%{escape_like(term)}%"
        stmt = (
            select(User.id, User.username, User.display_name, User.avatar_url)
            .where(
                or_(
                    User.username.ilike(pattern, escape="\\"),
                    User.display_name.ilike(pattern, escape="\\"),
                )
            )
            .order_by(User.username.asc())
            .limit(limit)
        )
        return [from_row(UserSummary, row) for row in self.session.execute(stmt).all()]
