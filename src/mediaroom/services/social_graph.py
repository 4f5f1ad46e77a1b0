"""Follow/unfollow edges and derived follower counts."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from mediaroom.core.errors import NotFoundError, ValidationError
from mediaroom.models import NotificationType
from mediaroom.repositories.follow_repo import FollowRepository
from mediaroom.repositories.records import FollowEntry
from mediaroom.repositories.user_repo import UserRepository
from mediaroom.services.notifications import notify

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FollowToggle:
    """Outcome of a follow toggle."""

    following: bool


@dataclass(frozen=True)
class FollowStats:
    """Follower and following totals for a user."""

    followers_count: int
    following_count: int


def toggle_follow(db: Session, follower_id: int, followed_id: int) -> FollowToggle:
    """Follow ``followed_id`` if not yet following, otherwise unfollow.

    The existence check and the write are not atomic; the composite primary
    key turns a concurrent duplicate insert into a rejected no-op.

    Raises:
        ValidationError: If a user tries to follow themselves.
        NotFoundError: If the followed user does not exist.
    """
    if follower_id == followed_id:
        raise ValidationError("Cannot follow yourself")
    if not UserRepository(db).exists(followed_id):
        raise NotFoundError("User not found")

    repo = FollowRepository(db)
    if repo.exists(follower_id, followed_id):
        repo.remove(follower_id, followed_id)
        db.commit()
        logger.debug("User %s unfollowed user %s", follower_id, followed_id)
        return FollowToggle(following=False)

    try:
        repo.add(follower_id, followed_id)
        db.commit()
    except IntegrityError:
        # A concurrent request inserted the same edge first.
        db.rollback()
        logger.info("Ignored duplicate follow %s -> %s", follower_id, followed_id)
        return FollowToggle(following=True)

    logger.debug("User %s followed user %s", follower_id, followed_id)
    notify(db, followed_id, follower_id, NotificationType.FOLLOW)
    return FollowToggle(following=True)


def is_following(db: Session, follower_id: int, followed_id: int) -> bool:
    return FollowRepository(db).exists(follower_id, followed_id)


def get_followers(db: Session, user_id: int) -> list[FollowEntry]:
    """Return users following ``user_id``, most recent first."""
    return FollowRepository(db).followers_of(user_id)


def get_following(db: Session, user_id: int) -> list[FollowEntry]:
    """Return users ``user_id`` follows, most recent first."""
    return FollowRepository(db).followed_by(user_id)


def get_follower_count(db: Session, user_id: int) -> int:
    return FollowRepository(db).count_followers(user_id)


def get_following_count(db: Session, user_id: int) -> int:
    return FollowRepository(db).count_following(user_id)


def get_stats(db: Session, user_id: int) -> FollowStats:
    """Return both edge counts, read straight from the edge table."""
    return FollowStats(
        followers_count=get_follower_count(db, user_id),
        following_count=get_following_count(db, user_id),
    )
