"""Profile reads, upserts and follow lists."""
from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy import desc
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from gridrr.core.errors import NotFoundError
from gridrr.models import Follow, Profile, User
from gridrr.models.profile import PROFILE_FIELDS
from gridrr.schemas.profile import FollowUser, ProfileResponse
from gridrr.services import engagement

logger = logging.getLogger(__name__)


def _profile_for(db: Session, user_id: int) -> Profile | None:
    return db.query(Profile).filter(Profile.user_id == user_id).first()


def get_profile(db: Session, user_id: int, viewer_id: int | None = None) -> ProfileResponse:
    """Return a user's profile with follow counts as seen by ``viewer_id``.

    Raises:
        NotFoundError: If the user has not created a profile.
    """
    profile = _profile_for(db, user_id)
    if profile is None:
        raise NotFoundError("Profile not found")

    data = {field: getattr(profile, field) for field in PROFILE_FIELDS}
    return ProfileResponse(
        user_id=user_id,
        follower_count=engagement.follower_count(db, user_id),
        following_count=engagement.following_count(db, user_id),
        is_following=engagement.is_following(db, viewer_id, user_id),
        **data,
    )


def get_own_profile(db: Session, user_id: int) -> ProfileResponse:
    """Return the caller's own profile, blank if they have not created one yet."""
    if _profile_for(db, user_id) is not None:
        return get_profile(db, user_id, user_id)
    return ProfileResponse(
        user_id=user_id,
        follower_count=engagement.follower_count(db, user_id),
        following_count=engagement.following_count(db, user_id),
    )


def upsert_profile(db: Session, user_id: int, fields: Mapping[str, Any]) -> Profile:
    """Create the user's profile or update the supplied fields in place.

    Keys outside the profile columns are ignored; omitted keys keep their
    stored value.
    """
    changes = {key: value for key, value in fields.items() if key in PROFILE_FIELDS}

    profile = _profile_for(db, user_id)
    if profile is None:
        profile = Profile(user_id=user_id, **changes)
        db.add(profile)
        try:
            db.commit()
        except IntegrityError:
            # A concurrent request created the row first; update it instead.
            db.rollback()
            profile = _profile_for(db, user_id)
            if profile is None:
                raise
            _apply(profile, changes)
            db.commit()
        else:
            logger.info("Created profile for user %s", user_id)
    else:
        _apply(profile, changes)
        db.commit()

    db.refresh(profile)
    return profile


def _apply(profile: Profile, changes: Mapping[str, Any]) -> None:
    for key, value in changes.items():
        setattr(profile, key, value)


def _follow_list(
    db: Session,
    *,
    match_column: Any,
    user_column: Any,
    user_id: int,
    limit: int,
    offset: int,
) -> list[FollowUser]:
    rows = (
        db.query(
            User.id,
            User.first_name,
            User.last_name,
            Profile.display_name,
            Profile.avatar_url,
            Profile.expertise,
        )
        .join(Follow, user_column == User.id)
        .outerjoin(Profile, Profile.user_id == User.id)
        .filter(match_column == user_id)
        .order_by(desc(Follow.created_at), desc(Follow.id))
        .offset(offset)
        .limit(limit)
        .all()
    )
    return [
        FollowUser(
            id=row.id,
            first_name=row.first_name,
            last_name=row.last_name,
            display_name=row.display_name,
            avatar_url=row.avatar_url,
            expertise=row.expertise,
        )
        for row in rows
    ]


def list_followers(
    db: Session, user_id: int, limit: int = 20, offset: int = 0
) -> list[FollowUser]:
    """Return users following ``user_id``, most recent follow first."""
    return _follow_list(
        db,
        match_column=Follow.following_id,
        user_column=Follow.follower_id,
        user_id=user_id,
        limit=limit,
        offset=offset,
    )


def list_following(
    db: Session, user_id: int, limit: int = 20, offset: int = 0
) -> list[FollowUser]:
    """Return users that ``user_id`` follows, most recent follow first."""
    return _follow_list(
        db,
        match_column=Follow.follower_id,
        user_column=Follow.following_id,
        user_id=user_id,
        limit=limit,
        offset=offset,
    )
