"""Data access helpers for working with content."""
from __future__ import annotations

import enum

from sqlalchemy import ColumnElement, Select, and_, delete, func, or_, select
from sqlalchemy.orm import Session

from mediaroom.models import Comment, Content, FollowEdge, User
from mediaroom.repositories.records import ContentDetail, from_row

__all__ = ["ContentRepository", "SortMode", "escape_like"]


class SortMode(str, enum.Enum):
    """Supported feed orderings."""

    NEWEST = "newest"
    POPULAR = "popular"
    MOST_VIEWED = "most_viewed"


_COUNTER_SORT_KEYS = {
    SortMode.POPULAR: Content.like_count,
    SortMode.MOST_VIEWED: Content.view_count,
}


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so ``term`` matches literally."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class ContentRepository:
    """Thin wrapper around database access for content entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def create(
        self,
        *,
        author_id: int,
        kind: str,
        title: str,
        description: str | None,
        media_url: str | None,
        thumbnail_url: str | None,
    ) -> Content:
        """Insert a new content row and return the persisted ORM instance.

        Counters always start at zero; the id is assigned by the datastore.
        """
        content = Content(
            author_id=author_id,
            kind=kind,
            title=title,
            description=description,
            media_url=media_url,
            thumbnail_url=thumbnail_url,
            like_count=0,
            view_count=0,
        )
        self.session.add(content)
        self.session.flush()
        return content

    def get_author_id(self, content_id: int) -> int | None:
        """Return the author of a content row, or None if it does not exist."""
        return self.session.execute(
            select(Content.author_id).where(Content.id == content_id)
        ).scalar_one_or_none()

    def find_by_id(self, content_id: int) -> ContentDetail | None:
        """Return a content row with counters and author identity."""
        row = self.session.execute(
            self._detail_select().where(Content.id == content_id)
        ).first()
        return from_row(ContentDetail, row) if row is not None else None

    def delete_by_id_and_author(self, content_id: int, author_id: int) -> bool:
        """Delete a content row owned by ``author_id`` together with its comments.

        Returns:
            False when the row does not exist or belongs to someone else.
        """
        owner = self.get_author_id(content_id)
        if owner is None or owner != author_id:
            return False

        self.session.execute(delete(Comment).where(Comment.content_id == content_id))
        self.session.execute(
            delete(Content).where(Content.id == content_id, Content.author_id == author_id)
        )
        self.session.flush()
        return True

    def count(self) -> int:
        """Return the total number of content rows."""
        return int(self.session.execute(select(func.count(Content.id))).scalar_one())

    def list_page(
        self,
        *,
        sort: SortMode,
        limit: int,
        cursor: int | None = None,
        follower_id: int | None = None,
        author_id: int | None = None,
        compound_cursor: bool = True,
    ) -> list[ContentDetail]:
        """Return one feed page ordered per ``sort``.

        Args:
            sort: Ordering mode; every mode breaks ties on ``id desc``.
            limit: Maximum number of rows to return.
            cursor: Id of the last row of the previous page, if any.
            follower_id: Restrict to authors followed by this user.
            author_id: Restrict to a single author.
            compound_cursor: Resolve the cursor row's sort key for counter sorts
                instead of approximating with ``id < cursor``.
        """
        stmt = self._detail_select()
        if follower_id is not None:
            stmt = stmt.join(
                FollowEdge,
                and_(
                    FollowEdge.followed_id == Content.author_id,
                    FollowEdge.follower_id == follower_id,
                ),
            )
        if author_id is not None:
            stmt = stmt.where(Content.author_id == author_id)
        if cursor is not None:
            stmt = stmt.where(self._cursor_predicate(sort, cursor, compound_cursor))

        stmt = stmt.order_by(*self._ordering(sort)).limit(limit)
        rows = self.session.execute(stmt).all()
        return [from_row(ContentDetail, row) for row in rows]

    def search(self, term: str, limit: int) -> list[ContentDetail]:
        """Return content whose title, description or author matches ``term``."""
        pattern = f"%{escape_like(term)}%"
        stmt = (
            self._detail_select()
            .where(
                or_(
                    Content.title.ilike(pattern, escape="\\"),
                    Content.description.ilike(pattern, escape="\\"),
                    User.username.ilike(pattern, escape="\\"),
                    User.display_name.ilike(pattern, escape="\\"),
                )
            )
            .order_by(Content.id.desc())
            .limit(limit)
        )
        return [from_row(ContentDetail, row) for row in self.session.execute(stmt).all()]

    def _detail_select(self) -> Select:
        # Comment totals are counted on read; only likes/views are persisted.
        comment_count = (
            select(func.count(Comment.id))
            .where(Comment.content_id == Content.id)
            .correlate(Content)
            .scalar_subquery()
        )
        return select(
            Content.id,
            Content.author_id,
            Content.kind,
            Content.media_url,
            Content.thumbnail_url,
            Content.title,
            Content.description,
            Content.like_count,
            Content.view_count,
            comment_count.label("comment_count"),
            Content.created_at,
            User.username.label("author_username"),
            User.display_name.label("author_display_name"),
            User.avatar_url.label("author_avatar_url"),
        ).select_from(Content).join(User, User.id == Content.author_id)

    @staticmethod
    def _ordering(sort: SortMode) -> tuple[ColumnElement, ...]:
        if sort is SortMode.NEWEST:
            return (Content.created_at.desc(), Content.id.desc())
        return (_COUNTER_SORT_KEYS[sort].desc(), Content.id.desc())

    def _cursor_predicate(
        self,
        sort: SortMode,
        cursor: int,
        compound_cursor: bool,
    ) -> ColumnElement[bool]:
        # Ids and created_at are co-monotonic, so newest needs only the id.
        if sort is SortMode.NEWEST or not compound_cursor:
            return Content.id < cursor

        key = _COUNTER_SORT_KEYS[sort]
        anchor = self.session.execute(
            select(key).where(Content.id == cursor)
        ).scalar_one_or_none()
        if anchor is None:
            return Content.id < cursor
        return or_(key < anchor, and_(key == anchor, Content.id < cursor))
