# src/mediaroom/api/v1/endpoints/media.py
"""Content feed, detail, like and comment endpoints."""

from fastapi import APIRouter, Query, Response, status

from mediaroom.core.errors import NotFoundError, UnauthorizedError
from mediaroom.core.settings import settings
from mediaroom.repositories.records import CommentDetail, ContentDetail
from mediaroom.schemas.comment import CommentCreate, CommentOut
from mediaroom.schemas.common import AUTH_ERROR_RESPONSES, ERROR_RESPONSES, CountResponse
from mediaroom.schemas.content import (
    ContentCreate,
    ContentOut,
    FeedPageOut,
    LikeRequest,
    LikeResponse,
)
from mediaroom.services import content_service, interactions
from mediaroom.services.feed import Audience, FeedPage, assemble_feed

from ..dependencies import CurrentUserDep, OptionalUserDep, SessionDep, ensure_same_user

router = APIRouter(
    prefix="/media",
    tags=["media"],
    responses={**ERROR_RESPONSES, **AUTH_ERROR_RESPONSES},
)


def normalize_sort(sort: str) -> str:
    """Accept both ``most-viewed`` and ``most_viewed`` spellings."""
    return sort.strip().lower().replace("-", "_")


@router.get("", response_model=FeedPageOut)
async def list_media(
    db: SessionDep,
    current_user: OptionalUserDep,
    sort: str = Query("newest", description="newest, popular or most-viewed"),
    cursor: int | None = Query(None, description="Id of the last item of the previous page"),
    limit: int = Query(settings.feed_default_limit),
    following: int | None = Query(None, description="Restrict to authors this user follows"),
) -> FeedPage:
    """Return one feed page, globally or from followed authors."""
    audience = Audience.global_()
    if following is not None:
        if current_user is None:
            raise UnauthorizedError("Not authenticated")
        ensure_same_user(current_user, following)
        audience = Audience.following(current_user.id)

    return assemble_feed(
        db,
        sort=normalize_sort(sort),
        audience=audience,
        cursor=cursor,
        limit=limit,
    )


@router.post("", response_model=ContentOut, status_code=status.HTTP_201_CREATED)
async def create_media(
    payload: ContentCreate,
    db: SessionDep,
    current_user: CurrentUserDep,
) -> ContentDetail:
    """Create content, uploading inline media to the blob store when given."""
    if payload.file_b64 is not None:
        return await content_service.upload_and_create(
            db,
            author_id=current_user.id,
            kind=payload.kind,
            title=payload.title,
            description=payload.description,
            file_b64=payload.file_b64,
            filename=payload.filename or "",
            content_type=payload.content_type or "",
            thumbnail_b64=payload.thumbnail_b64,
        )

    return content_service.create_content(
        db,
        author_id=current_user.id,
        kind=payload.kind,
        title=payload.title,
        description=payload.description,
        media_url=payload.media_url,
    )


@router.get("/count", response_model=CountResponse)
async def count_media(db: SessionDep) -> CountResponse:
    return CountResponse(count=content_service.count_content(db))


@router.get("/{content_id}", response_model=ContentOut)
async def get_media(content_id: int, db: SessionDep) -> ContentDetail:
    """Return content detail and count the view."""
    return content_service.get_content(db, content_id)


@router.delete("/{content_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_media(content_id: int, db: SessionDep, current_user: CurrentUserDep) -> Response:
    # Non-authors get the same answer as for missing content.
    if not content_service.delete_content(db, content_id, current_user.id):
        raise NotFoundError("Content not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{content_id}/like", response_model=LikeResponse)
async def like_media(
    content_id: int,
    payload: LikeRequest,
    db: SessionDep,
    current_user: CurrentUserDep,
) -> LikeResponse:
    result = interactions.toggle_like(db, content_id, current_user.id, payload.action)
    return LikeResponse(action=result.action, like_count=result.like_count)


@router.get("/{content_id}/comments", response_model=list[CommentOut])
async def list_media_comments(content_id: int, db: SessionDep) -> list[CommentDetail]:
    return interactions.list_comments(db, content_id)


@router.post(
    "/{content_id}/comments",
    response_model=CommentOut,
    status_code=status.HTTP_201_CREATED,
)
async def comment_on_media(
    content_id: int,
    payload: CommentCreate,
    db: SessionDep,
    current_user: CurrentUserDep,
) -> CommentDetail:
    return interactions.create_comment(db, content_id, current_user.id, payload.body)
