"""Data access helpers for notifications."""
from __future__ import annotations

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from mediaroom.models import Notification, User
from mediaroom.repositories.records import NotificationDetail, from_row

__all__ = ["NotificationRepository"]


class NotificationRepository:
    """Persistence for notification rows."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(
        self,
        *,
        recipient_id: int,
        actor_id: int,
        type: str,
        reference_id: int | None = None,
    ) -> Notification:
        """Insert an unread notification."""
        notification = Notification(
            recipient_id=recipient_id,
            actor_id=actor_id,
            type=type,
            reference_id=reference_id,
            is_read=False,
        )
        self.session.add(notification)
        self.session.flush()
        return notification

    def get_by_id(self, notification_id: int) -> Notification | None:
        return self.session.get(Notification, notification_id)

    def mark_read(self, notification_id: int) -> int:
        """Flag a notification as read; already-read rows are left untouched."""
        result = self.session.execute(
            update(Notification)
            .where(Notification.id == notification_id, Notification.is_read.is_(False))
            .values(is_read=True)
            .execution_options(synchronize_session=False)
        )
        return int(result.rowcount or 0)

    def mark_all_read(self, recipient_id: int) -> int:
        result = self.session.execute(
            update(Notification)
            .where(Notification.recipient_id == recipient_id, Notification.is_read.is_(False))
            .values(is_read=True)
            .execution_options(synchronize_session=False)
        )
        return int(result.rowcount or 0)

    def list_for_recipient(
        self,
        recipient_id: int,
        *,
        limit: int,
        unread_only: bool = False,
    ) -> list[NotificationDetail]:
        """Return notifications for a recipient, newest first."""
        stmt = (
            select(
                Notification.id,
                Notification.recipient_id,
                Notification.actor_id,
                Notification.type,
                Notification.reference_id,
                Notification.is_read,
                Notification.created_at,
                User.username.label("actor_username"),
                User.display_name.label("actor_display_name"),
                User.avatar_url.label("actor_avatar_url"),
            )
            .select_from(Notification)
            .join(User, User.id == Notification.actor_id)
            .where(Notification.recipient_id == recipient_id)
        )
        if unread_only:
            stmt = stmt.where(Notification.is_read.is_(False))
        stmt = stmt.order_by(Notification.created_at.desc(), Notification.id.desc()).limit(limit)
        return [from_row(NotificationDetail, row) for row in self.session.execute(stmt).all()]

    def count_unread(self, recipient_id: int) -> int:
        return int(
            self.session.execute(
                select(func.count())
                .select_from(Notification)
                .where(
                    Notification.recipient_id == recipient_id,
                    Notification.is_read.is_(False),
                )
            ).scalar_one()
        )
