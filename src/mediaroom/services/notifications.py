"""Notification fan-out and inbox operations.

Fan-out runs after the triggering write has been committed and is
failure-isolated: a failed insert is rolled back and logged, and the caller
still reports its own action as successful.
"""
from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from mediaroom.core.errors import NotFoundError
from mediaroom.core.settings import settings
from mediaroom.models import Notification, NotificationType
from mediaroom.repositories.notification_repo import NotificationRepository
from mediaroom.repositories.records import NotificationDetail

logger = logging.getLogger(__name__)

__all__ = [
    "notify",
    "mark_read",
    "mark_all_read",
    "list_for_recipient",
    "unread_count",
]


def notify(
    db: Session,
    recipient_id: int,
    actor_id: int,
    type: NotificationType | str,
    reference_id: int | None = None,
) -> Notification | None:
    """Create one notification for ``recipient_id``, best-effort.

    Returns:
        The stored notification, or None when suppressed (self-action) or
        when the insert failed.
    """
    if recipient_id == actor_id:
        return None

    kind = NotificationType(type).value
    try:
        notification = NotificationRepository(db).create(
            recipient_id=recipient_id,
            actor_id=actor_id,
            type=kind,
            reference_id=reference_id,
        )
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.warning(
            "Dropping %s notification for user %s from user %s: %s",
            kind,
            recipient_id,
            actor_id,
            exc,
        )
        return None
    return notification


def mark_read(db: Session, notification_id: int, recipient_id: int | None = None) -> None:
    """Mark a notification as read; repeating the call is a no-op.

    Raises:
        NotFoundError: If the notification does not exist or is addressed to
            another recipient.
    """
    repo = NotificationRepository(db)
    notification = repo.get_by_id(notification_id)
    if notification is None or (
        recipient_id is not None and notification.recipient_id != recipient_id
    ):
        raise NotFoundError("Notification not found")

    if repo.mark_read(notification_id):
        db.commit()


def mark_all_read(db: Session, recipient_id: int) -> int:
    """Mark every unread notification of a recipient as read."""
    updated = NotificationRepository(db).mark_all_read(recipient_id)
    db.commit()
    return updated


def list_for_recipient(
    db: Session,
    user_id: int,
    *,
    unread_only: bool = False,
    limit: int | None = None,
) -> list[NotificationDetail]:
    """Return the recipient's notifications, newest first, with actor identity."""
    return NotificationRepository(db).list_for_recipient(
        user_id,
        limit=limit or settings.notification_list_limit,
        unread_only=unread_only,
    )


def unread_count(db: Session, user_id: int) -> int:
    return NotificationRepository(db).count_unread(user_id)
