"""Data access helpers for comments."""
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from mediaroom.models import Comment, User
from mediaroom.repositories.records import CommentDetail, from_row

__all__ = ["CommentRepository"]


class CommentRepository:
    """Insert and list comments with their author identity joined."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, *, content_id: int, author_id: int, body: str) -> Comment:
        """Insert a comment and return the persisted ORM instance."""
        comment = Comment(content_id=content_id, author_id=author_id, body=body)
        self.session.add(comment)
        self.session.flush()
        return comment

    def find_by_id(self, comment_id: int) -> CommentDetail | None:
        row = self.session.execute(
            self._detail_select().where(Comment.id == comment_id)
        ).first()
        return from_row(CommentDetail, row) if row is not None else None

    def list_for_content(self, content_id: int) -> list[CommentDetail]:
        """Return comments on a content row, oldest first."""
        stmt = (
            self._detail_select()
            .where(Comment.content_id == content_id)
            .order_by(Comment.created_at.asc(), Comment.id.asc())
        )
        return [from_row(CommentDetail, row) for row in self.session.execute(stmt).all()]

    @staticmethod
    def _detail_select():
        return (
            select(
                Comment.id,
                Comment.content_id,
                Comment.author_id,
                Comment.body,
                Comment.created_at,
                User.username.label("author_username"),
                User.display_name.label("author_display_name"),
                User.avatar_url.label("author_avatar_url"),
            )
            .select_from(Comment)
            .join(User, User.id == Comment.author_id)
        )
