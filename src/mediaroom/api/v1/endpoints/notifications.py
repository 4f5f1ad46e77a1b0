# src/mediaroom/api/v1/endpoints/notifications.py
"""Notification inbox endpoints for the authenticated user."""

from fastapi import APIRouter, Query

from mediaroom.repositories.records import NotificationDetail
from mediaroom.schemas.common import (
    AUTH_ERROR_RESPONSES,
    ERROR_RESPONSES,
    CountResponse,
    SuccessResponse,
)
from mediaroom.schemas.notification import MarkAllReadOut, NotificationOut
from mediaroom.services import notifications

from ..dependencies import CurrentUserDep, SessionDep, ensure_same_user

router = APIRouter(
    prefix="/notifications",
    tags=["notifications"],
    responses={**ERROR_RESPONSES, **AUTH_ERROR_RESPONSES},
)


@router.get("", response_model=list[NotificationOut])
async def list_notifications(
    db: SessionDep,
    current_user: CurrentUserDep,
    user_id: int | None = Query(None, alias="userId"),
    unread: bool = Query(False),
    limit: int | None = Query(None, ge=1, le=200),
) -> list[NotificationDetail]:
    """Return the caller's notifications, newest first."""
    ensure_same_user(current_user, user_id)
    return notifications.list_for_recipient(
        db,
        current_user.id,
        unread_only=unread,
        limit=limit,
    )


@router.get("/unread-count", response_model=CountResponse)
async def get_unread_count(db: SessionDep, current_user: CurrentUserDep) -> CountResponse:
    return CountResponse(count=notifications.unread_count(db, current_user.id))


@router.put("/read-all", response_model=MarkAllReadOut)
async def mark_all_notifications_read(
    db: SessionDep,
    current_user: CurrentUserDep,
) -> MarkAllReadOut:
    updated = notifications.mark_all_read(db, current_user.id)
    return MarkAllReadOut(updated=updated)


@router.put("/{notification_id}/read", response_model=SuccessResponse)
async def mark_notification_read(
    notification_id: int,
    db: SessionDep,
    current_user: CurrentUserDep,
) -> SuccessResponse:
    notifications.mark_read(db, notification_id, recipient_id=current_user.id)
    return SuccessResponse()
