"""Substring search across users and content."""
from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.orm import Session

from mediaroom.core.settings import settings
from mediaroom.repositories.content_repo import ContentRepository
from mediaroom.repositories.records import ContentDetail, UserSummary
from mediaroom.repositories.user_repo import UserRepository


@dataclass(frozen=True)
class SearchResult:
    """A tagged search hit; exactly one of ``user``/``content`` is set."""

    type: str
    user: UserSummary | None = None
    content: ContentDetail | None = None


def search(db: Session, query: str, limit: int | None = None) -> list[SearchResult]:
    """Return matching users followed by matching content.

    Both lookups are case-insensitive substring matches capped at ``limit``
    each. Ranking is not attempted.
    """
    term = (query or "").strip()
    if not term:
        return []

    cap = limit or settings.search_limit
    users = UserRepository(db).search(term, cap)
    contents = ContentRepository(db).search(term, cap)

    results = [SearchResult(type="user", user=user) for user in users]
    results.extend(SearchResult(type="content", content=content) for content in contents)
    return results
