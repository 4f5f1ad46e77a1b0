"""Counter store for denormalized content aggregates.

Every mutation is a single ``UPDATE ... RETURNING`` statement so concurrent
likers never lose updates; no value is read into Python and written back.
"""
from __future__ import annotations

import enum
import logging

from sqlalchemy import ColumnElement, case, update
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from mediaroom.core.errors import NotFoundError, UpstreamError, ValidationError
from mediaroom.models import Content

logger = logging.getLogger(__name__)


class CounterField(str, enum.Enum):
    """Counters owned by the counter store."""

    LIKES = "like_count"
    VIEWS = "view_count"


def increment(db: Session, content_id: int, field: CounterField | str) -> int:
    """Atomically add one to ``field`` and return the new value.

    Raises:
        ValidationError: If ``field`` is not a known counter.
        NotFoundError: If the content row does not exist.
        UpstreamError: If the datastore is unavailable (retryable).
    """
    name = _parse_field(field)
    column = getattr(Content, name)
    return _apply(db, content_id, name, column + 1)


def decrement(db: Session, content_id: int, field: CounterField | str) -> int:
    """Atomically subtract one from ``field``, never going below zero.

    Raises:
        ValidationError: If ``field`` is not a known counter.
        NotFoundError: If the content row does not exist.
        UpstreamError: If the datastore is unavailable (retryable).
    """
    name = _parse_field(field)
    column = getattr(Content, name)
    return _apply(db, content_id, name, case((column > 0, column - 1), else_=0))


def _parse_field(field: CounterField | str) -> str:
    try:
        return CounterField(field).value
    except ValueError as exc:
        raise ValidationError(f"Unsupported counter: {field}") from exc


def _apply(db: Session, content_id: int, name: str, expression: ColumnElement) -> int:
    column = getattr(Content, name)
    stmt = (
        update(Content)
        .where(Content.id == content_id)
        .values({column: expression})
        .returning(column)
        .execution_options(synchronize_session=False)
    )
    try:
        new_value = db.execute(stmt).scalar_one_or_none()
        if new_value is None:
            db.rollback()
            raise NotFoundError("Content not found")
        db.commit()
    except OperationalError as exc:
        db.rollback()
        logger.error("Counter update of %s failed for content %s: %s", name, content_id, exc)
        raise UpstreamError("Datastore unavailable", retryable=True) from exc
    return int(new_value)
