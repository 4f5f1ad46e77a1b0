# src/mediaroom/api/v1/endpoints/search.py
"""Aggregated user and content search."""

from fastapi import APIRouter, Query

from mediaroom.schemas.common import ERROR_RESPONSES
from mediaroom.schemas.search import SearchResponse, SearchResultOut
from mediaroom.services.search import search

from ..dependencies import SessionDep

router = APIRouter(prefix="/search", tags=["search"], responses=ERROR_RESPONSES)


@router.get("", response_model=SearchResponse)
async def search_all(
    db: SessionDep,
    q: str = Query("", description="Case-insensitive substring to look for"),
) -> SearchResponse:
    results = search(db, q)
    return SearchResponse(
        query=q,
        results=[SearchResultOut.model_validate(result) for result in results],
    )
