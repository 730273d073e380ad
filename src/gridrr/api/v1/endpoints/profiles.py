"""Profile and follow endpoints for the Gridrr API."""

from __future__ import annotations

from fastapi import APIRouter, Query

from gridrr.api.v1.dependencies import CurrentUserDep, OptionalUserDep, SessionDep
from gridrr.schemas.profile import (
    FollowToggleResponse,
    FollowUser,
    ProfileResponse,
    ProfileUpdate,
)
from gridrr.services import engagement
from gridrr.services import profiles as profile_service

router = APIRouter(prefix="/profiles", tags=["profiles"])


@router.get("/me", response_model=ProfileResponse)
def read_my_profile(current_user: CurrentUserDep, db: SessionDep) -> ProfileResponse:
    """Return the authenticated user's profile; blank fields until one is saved."""
    return profile_service.get_own_profile(db, current_user.id)


@router.post("/me", response_model=ProfileResponse)
def upsert_my_profile(
    payload: ProfileUpdate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> ProfileResponse:
    """Create or partially update the authenticated user's profile."""
    profile_service.upsert_profile(db, current_user.id, payload.model_dump(exclude_unset=True))
    return profile_service.get_profile(db, current_user.id, current_user.id)


@router.get("/{user_id}", response_model=ProfileResponse)
def read_profile(user_id: int, db: SessionDep, viewer: OptionalUserDep) -> ProfileResponse:
    """Return a user's profile with follow counts."""
    return profile_service.get_profile(db, user_id, viewer.id if viewer else None)


@router.get("/{user_id}/followers", response_model=list[FollowUser])
def list_followers(
    user_id: int,
    db: SessionDep,
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
) -> list[FollowUser]:
    """List users following ``user_id``."""
    return profile_service.list_followers(db, user_id, limit=limit, offset=offset)


@router.get("/{user_id}/following", response_model=list[FollowUser])
def list_following(
    user_id: int,
    db: SessionDep,
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
) -> list[FollowUser]:
    """List users that ``user_id`` follows."""
    return profile_service.list_following(db, user_id, limit=limit, offset=offset)


@router.post("/{user_id}/follow", response_model=FollowToggleResponse)
def toggle_follow(
    user_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> FollowToggleResponse:
    """Follow ``user_id``, or unfollow if already following."""
    following = engagement.toggle_follow(db, current_user.id, user_id)
    return FollowToggleResponse(following=following)
