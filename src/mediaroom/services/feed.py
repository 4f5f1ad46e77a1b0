"""Cursor-paginated feed assembly over the content repository."""
from __future__ import annotations

import enum
from dataclasses import dataclass

from sqlalchemy.orm import Session

from mediaroom.core.errors import ValidationError
from mediaroom.core.settings import settings
from mediaroom.repositories.content_repo import ContentRepository, SortMode
from mediaroom.repositories.records import ContentDetail

__all__ = ["Audience", "AudienceKind", "FeedPage", "assemble_feed"]


class AudienceKind(str, enum.Enum):
    GLOBAL = "global"
    FOLLOWING = "following"
    AUTHOR = "author"


@dataclass(frozen=True)
class Audience:
    """Which content a feed page draws from."""

    kind: AudienceKind = AudienceKind.GLOBAL
    user_id: int | None = None

    @classmethod
    def global_(cls) -> Audience:
        return cls()

    @classmethod
    def following(cls, user_id: int) -> Audience:
        """Content authored by users that ``user_id`` follows."""
        return cls(kind=AudienceKind.FOLLOWING, user_id=user_id)

    @classmethod
    def author(cls, user_id: int) -> Audience:
        """Content authored by ``user_id`` alone."""
        return cls(kind=AudienceKind.AUTHOR, user_id=user_id)


@dataclass(frozen=True)
class FeedPage:
    """One page of a feed and the cursor for the next one."""

    posts: list[ContentDetail]
    next_cursor: str | None
    has_more: bool


def assemble_feed(
    db: Session,
    *,
    sort: SortMode | str = SortMode.NEWEST,
    audience: Audience | None = None,
    cursor: int | None = None,
    limit: int | None = None,
) -> FeedPage:
    """Return one feed page.

    Args:
        db: Active database session.
        sort: Ordering mode; ties always break on ``id desc``.
        audience: Global, following or single-author source. Defaults to global.
        cursor: Id of the last row of the previous page.
        limit: Page size, bounded by ``FEED_MAX_LIMIT``.

    Raises:
        ValidationError: For an unknown sort mode or an out-of-range limit.
    """
    try:
        mode = SortMode(sort)
    except ValueError as exc:
        raise ValidationError(f"Unsupported sort mode: {sort}") from exc

    page_size = settings.feed_default_limit if limit is None else limit
    if page_size < 1 or page_size > settings.feed_max_limit:
        raise ValidationError(f"limit must be between 1 and {settings.feed_max_limit}")

    audience = audience or Audience.global_()
    posts = ContentRepository(db).list_page(
        sort=mode,
        limit=page_size,
        cursor=cursor,
        follower_id=audience.user_id if audience.kind is AudienceKind.FOLLOWING else None,
        author_id=audience.user_id if audience.kind is AudienceKind.AUTHOR else None,
        compound_cursor=settings.feed_compound_cursor,
    )

    # A full page may be followed by an empty one; no look-ahead query is made.
    has_more = len(posts) == page_size
    next_cursor = str(posts[-1].id) if has_more else None
    return FeedPage(posts=posts, next_cursor=next_cursor, has_more=has_more)
