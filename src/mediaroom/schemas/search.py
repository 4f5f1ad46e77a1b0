"""Search Pydantic schemas."""
from __future__ import annotations

from typing import Literal

from .common import ApiModel
from .content import ContentOut
from .user import UserSummaryOut


class SearchResultOut(ApiModel):
    type: Literal["user", "content"]
    user: UserSummaryOut | None = None
    content: ContentOut | None = None


class SearchResponse(ApiModel):
    query: str
    results: list[SearchResultOut]
