"""Identity lookups and minimal registration."""
from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from mediaroom.core.errors import ConflictError, NotFoundError, ValidationError
from mediaroom.models import User
from mediaroom.repositories.user_repo import UserRepository

logger = logging.getLogger(__name__)

USERNAME_MAX_LENGTH = 64


class UserService:
    """Service for registering and resolving users."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.repo = UserRepository(db)

    def create_user(
        self,
        username: str,
        *,
        display_name: str | None = None,
        avatar_url: str | None = None,
        bio: str | None = None,
    ) -> User:
        """Register a user.

        Raises:
            ValidationError: If the username is blank, too long or purely numeric.
            ConflictError: If the username is already taken.
        """
        handle = (username or "").strip()
        if not handle or len(handle) > USERNAME_MAX_LENGTH:
            raise ValidationError(
                f"Username must be between 1 and {USERNAME_MAX_LENGTH} characters"
            )
        # Profile routes accept either an id or a username.
        if handle.isdigit():
            raise ValidationError("Username cannot be purely numeric")
        if self.repo.get_by_username(handle) is not None:
            raise ConflictError("Username already taken")

        user = User(
            username=handle,
            display_name=display_name or handle,
            avatar_url=avatar_url,
            bio=bio,
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise ConflictError("Username already taken") from exc
        self.db.refresh(user)
        logger.info("Registered user %s (%s)", user.id, user.username)
        return user

    def get_user(self, user_id: int) -> User:
        user = self.repo.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def get_user_by_username(self, username: str) -> User:
        user = self.repo.get_by_username(username)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def resolve_user(self, id_or_username: str) -> User:
        """Resolve a path segment that is either a numeric id or a username."""
        if id_or_username.isdigit():
            return self.get_user(int(id_or_username))
        return self.get_user_by_username(id_or_username)
