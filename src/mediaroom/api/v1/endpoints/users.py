# src/mediaroom/api/v1/endpoints/users.py
"""User registration, profile and follow endpoints."""

from fastapi import APIRouter, Body, Query, status

from mediaroom.core.errors import UnauthorizedError
from mediaroom.core.settings import settings
from mediaroom.models import User
from mediaroom.repositories.records import FollowEntry
from mediaroom.schemas.common import AUTH_ERROR_RESPONSES, ERROR_RESPONSES
from mediaroom.schemas.content import FeedPageOut
from mediaroom.schemas.user import (
    FollowEntryOut,
    FollowRequest,
    FollowStatusOut,
    ProfileOut,
    StatsOut,
    UserCreate,
    UserOut,
)
from mediaroom.services import social_graph
from mediaroom.services.feed import Audience, FeedPage, assemble_feed
from mediaroom.services.user_service import UserService

from ..dependencies import CurrentUserDep, OptionalUserDep, SessionDep, ensure_same_user
from .media import normalize_sort

router = APIRouter(
    prefix="/users",
    tags=["users"],
    responses={**ERROR_RESPONSES, **AUTH_ERROR_RESPONSES},
)


@router.post("", response_model=UserOut, status_code=status.HTTP_201_CREATED)
async def register_user(payload: UserCreate, db: SessionDep) -> User:
    """Register a user; usernames are unique."""
    return UserService(db).create_user(
        payload.username,
        display_name=payload.display_name,
        avatar_url=payload.avatar_url,
        bio=payload.bio,
    )


@router.get("/{id_or_username}", response_model=ProfileOut)
async def get_profile(
    id_or_username: str,
    db: SessionDep,
    current_user: OptionalUserDep,
) -> ProfileOut:
    """Return a profile by numeric id or username, with the latest authored media."""
    user = UserService(db).resolve_user(id_or_username)
    stats = social_graph.get_stats(db, user.id)
    page = assemble_feed(db, audience=Audience.author(user.id))

    is_following = None
    if current_user is not None and current_user.id != user.id:
        is_following = social_graph.is_following(db, current_user.id, user.id)

    return ProfileOut(
        user=UserOut.model_validate(user),
        stats=StatsOut(
            followers_count=stats.followers_count,
            following_count=stats.following_count,
        ),
        is_following=is_following,
        media=FeedPageOut.model_validate(page),
    )


@router.post("/{user_id}/follow", response_model=FollowStatusOut)
async def toggle_follow(
    user_id: int,
    db: SessionDep,
    current_user: CurrentUserDep,
    payload: FollowRequest | None = Body(None),
) -> FollowStatusOut:
    """Follow the user, or unfollow if already following."""
    if payload is not None:
        ensure_same_user(current_user, payload.follower_id)
    result = social_graph.toggle_follow(db, current_user.id, user_id)
    return FollowStatusOut(is_following=result.following)


@router.get("/{user_id}/follow", response_model=FollowStatusOut)
async def get_follow_status(
    user_id: int,
    db: SessionDep,
    current_user: OptionalUserDep,
    follower_id: int | None = Query(None),
) -> FollowStatusOut:
    """Report whether ``follower_id`` (default: the caller) follows the user."""
    if follower_id is None:
        if current_user is None:
            raise UnauthorizedError("Not authenticated")
        follower_id = current_user.id
    return FollowStatusOut(is_following=social_graph.is_following(db, follower_id, user_id))


@router.get("/{user_id}/followers", response_model=list[FollowEntryOut])
async def list_followers(user_id: int, db: SessionDep) -> list[FollowEntry]:
    UserService(db).get_user(user_id)
    return social_graph.get_followers(db, user_id)


@router.get("/{user_id}/following", response_model=list[FollowEntryOut])
async def list_following(user_id: int, db: SessionDep) -> list[FollowEntry]:
    UserService(db).get_user(user_id)
    return social_graph.get_following(db, user_id)


@router.get("/{user_id}/stats", response_model=StatsOut)
async def get_user_stats(user_id: int, db: SessionDep) -> StatsOut:
    UserService(db).get_user(user_id)
    stats = social_graph.get_stats(db, user_id)
    return StatsOut(
        followers_count=stats.followers_count,
        following_count=stats.following_count,
    )


@router.get("/{user_id}/media", response_model=FeedPageOut)
async def list_user_media(
    user_id: int,
    db: SessionDep,
    sort: str = Query("newest"),
    cursor: int | None = Query(None),
    limit: int = Query(settings.feed_default_limit),
) -> FeedPage:
    """Return one page of content authored by the user."""
    UserService(db).get_user(user_id)
    return assemble_feed(
        db,
        sort=normalize_sort(sort),
        audience=Audience.author(user_id),
        cursor=cursor,
        limit=limit,
    )
