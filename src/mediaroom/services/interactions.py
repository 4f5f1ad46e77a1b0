"""Likes and comments on content."""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from mediaroom.core.errors import NotFoundError, ValidationError
from mediaroom.core.settings import settings
from mediaroom.models import NotificationType
from mediaroom.repositories.comment_repo import CommentRepository
from mediaroom.repositories.content_repo import ContentRepository
from mediaroom.repositories.records import CommentDetail
from mediaroom.services import counters
from mediaroom.services.counters import CounterField
from mediaroom.services.notifications import notify

logger = logging.getLogger(__name__)


class LikeAction(str, enum.Enum):
    """Client-declared like intent."""

    LIKE = "like"
    UNLIKE = "unlike"


@dataclass(frozen=True)
class LikeResult:
    """Outcome of a like toggle with the counter value after the update."""

    action: str
    like_count: int


def toggle_like(
    db: Session,
    content_id: int,
    user_id: int,
    action: LikeAction | str,
) -> LikeResult:
    """Apply a like or unlike to a content row.

    No per-user ledger is kept: the client's declared intent is trusted and
    only the aggregate counter moves.

    Raises:
        ValidationError: If ``action`` is not ``like`` or ``unlike``.
        NotFoundError: If the content does not exist.
    """
    try:
        intent = LikeAction(action)
    except ValueError as exc:
        raise ValidationError("Invalid action") from exc

    author_id = ContentRepository(db).get_author_id(content_id)
    if author_id is None:
        raise NotFoundError("Content not found")

    if intent is LikeAction.UNLIKE:
        like_count = counters.decrement(db, content_id, CounterField.LIKES)
        return LikeResult(action="unliked", like_count=like_count)

    like_count = counters.increment(db, content_id, CounterField.LIKES)
    notify(db, author_id, user_id, NotificationType.LIKE, reference_id=content_id)
    return LikeResult(action="liked", like_count=like_count)


def create_comment(db: Session, content_id: int, author_id: int, body: str) -> CommentDetail:
    """Store a comment and notify the content author.

    Raises:
        ValidationError: If the stripped body is empty or too long.
        NotFoundError: If the content does not exist.
    """
    text = (body or "").strip()
    if not text:
        raise ValidationError("Comment cannot be empty")
    if len(text) > settings.comment_max_length:
        raise ValidationError(
            f"Comment is too long (max {settings.comment_max_length} characters)"
        )

    content_author = ContentRepository(db).get_author_id(content_id)
    if content_author is None:
        raise NotFoundError("Content not found")

    repo = CommentRepository(db)
    comment = repo.create(content_id=content_id, author_id=author_id, body=text)
    db.commit()
    comment_id = comment.id

    notify(db, content_author, author_id, NotificationType.COMMENT, reference_id=content_id)

    detail = repo.find_by_id(comment_id)
    if detail is None:  # pragma: no cover - deleted between commit and read
        raise NotFoundError("Comment not found")
    return detail


def list_comments(db: Session, content_id: int) -> list[CommentDetail]:
    """Return comments on ``content_id``, oldest first."""
    if ContentRepository(db).get_author_id(content_id) is None:
        raise NotFoundError("Content not found")
    return CommentRepository(db).list_for_content(content_id)
