"""Engagement ledger: views, likes and follows.

Every action is a row keyed by a unique (actor, target) pair. Writes rely on
that constraint instead of in-process locking: inserts are
``ON CONFLICT DO NOTHING`` and toggles delete first, so each statement is
atomic on its own and concurrent duplicates can never produce a second row.
All counts are derived from the ledger at read time.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from sqlalchemy import delete, func
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from gridrr.core.errors import InvalidOperationError, NotFoundError
from gridrr.models import Follow, PostLike, PostView, User
from gridrr.repositories.post_repo import PostRepository

logger = logging.getLogger(__name__)

__all__ = [
    "record_view",
    "toggle_like",
    "toggle_follow",
    "has_liked",
    "has_viewed",
    "is_following",
    "like_count",
    "view_count",
    "like_counts",
    "view_counts",
    "follower_count",
    "following_count",
]


def _insert_ignore(db: Session, model: type[Any], **values: Any) -> bool:
    """Insert one ledger row, silently skipping a unique-constraint conflict.

    Returns:
        True if a row was written, False if it already existed.
    """
    dialect = db.get_bind().dialect.name
    if dialect == "postgresql":
        stmt = postgresql_insert(model.__table__).values(**values).on_conflict_do_nothing()
    elif dialect == "sqlite":
        stmt = sqlite_insert(model.__table__).values(**values).on_conflict_do_nothing()
    else:
        try:
            with db.begin_nested():
                db.add(model(**values))
        except IntegrityError:
            return False
        return True

    result = db.connection().execute(stmt)
    return bool(result.rowcount)


def record_view(db: Session, post_id: int, actor_id: int | None) -> bool:
    """Record that ``actor_id`` viewed ``post_id``.

    Anonymous viewers (``actor_id`` is None) are never recorded, and a repeat
    view by the same user is a no-op.

    Returns:
        True if this call created the view row.
    """
    if actor_id is None:
        return False

    created = _insert_ignore(db, PostView, post_id=post_id, user_id=actor_id)
    db.commit()
    if not created:
        logger.debug("User %s already viewed post %s", actor_id, post_id)
    return created


def toggle_like(db: Session, post_id: int, actor_id: int) -> bool:
    """Flip ``actor_id``'s like on ``post_id`` and return the new state.

    The delete runs first; only when nothing was deleted is a like inserted.
    If a concurrent request inserted the same like in between, the conflict is
    ignored and the post is reported as liked, which matches the stored state.
    """
    if not PostRepository(db).exists(post_id):
        raise NotFoundError("Post not found")

    removed = db.execute(
        delete(PostLike)
        .where(PostLike.post_id == post_id, PostLike.user_id == actor_id)
        .execution_options(synchronize_session=False)
    ).rowcount
    if removed:
        db.commit()
        logger.info("User %s unliked post %s", actor_id, post_id)
        return False

    _insert_ignore(db, PostLike, post_id=post_id, user_id=actor_id)
    db.commit()
    logger.info("User %s liked post %s", actor_id, post_id)
    return True


def toggle_follow(db: Session, follower_id: int, target_id: int) -> bool:
    """Flip whether ``follower_id`` follows ``target_id`` and return the new state.

    Raises:
        InvalidOperationError: If a user tries to follow themselves.
        NotFoundError: If the target user does not exist.
    """
    if follower_id == target_id:
        raise InvalidOperationError("Cannot follow yourself")
    if db.get(User, target_id) is None:
        raise NotFoundError("User not found")

    removed = db.execute(
        delete(Follow).where(
            Follow.follower_id == follower_id,
            Follow.following_id == target_id,
        ).execution_options(synchronize_session=False)
    ).rowcount
    if removed:
        db.commit()
        logger.info("User %s unfollowed user %s", follower_id, target_id)
        return False

    _insert_ignore(db, Follow, follower_id=follower_id, following_id=target_id)
    db.commit()
    logger.info("User %s followed user %s", follower_id, target_id)
    return True


def has_liked(db: Session, post_id: int, actor_id: int | None) -> bool:
    """Return True if ``actor_id`` currently likes ``post_id``."""
    if actor_id is None:
        return False
    return (
        db.query(PostLike.id)
        .filter(PostLike.post_id == post_id, PostLike.user_id == actor_id)
        .first()
        is not None
    )


def has_viewed(db: Session, post_id: int, actor_id: int | None) -> bool:
    """Return True if ``actor_id`` has a recorded view of ``post_id``."""
    if actor_id is None:
        return False
    return (
        db.query(PostView.id)
        .filter(PostView.post_id == post_id, PostView.user_id == actor_id)
        .first()
        is not None
    )


def is_following(db: Session, follower_id: int | None, target_id: int | None) -> bool:
    """Return True if ``follower_id`` follows ``target_id``.

    Always False for an anonymous viewer or when both ids are the same user.
    """
    if follower_id is None or target_id is None or follower_id == target_id:
        return False
    return (
        db.query(Follow.id)
        .filter(Follow.follower_id == follower_id, Follow.following_id == target_id)
        .first()
        is not None
    )


def like_count(db: Session, post_id: int) -> int:
    """Return the number of likes on ``post_id``."""
    return db.query(func.count(PostLike.id)).filter(PostLike.post_id == post_id).scalar() or 0


def view_count(db: Session, post_id: int) -> int:
    """Return the number of distinct authenticated viewers of ``post_id``."""
    return (
        db.query(func.count(func.distinct(PostView.user_id)))
        .filter(PostView.post_id == post_id, PostView.user_id.is_not(None))
        .scalar()
        or 0
    )


def like_counts(db: Session, post_ids: Iterable[int]) -> dict[int, int]:
    """Return like counts for many posts in one grouped query.

    Posts without likes are absent from the result; callers default to 0.
    """
    ids = list(post_ids)
    if not ids:
        return {}
    rows = (
        db.query(PostLike.post_id, func.count(PostLike.id))
        .filter(PostLike.post_id.in_(ids))
        .group_by(PostLike.post_id)
        .all()
    )
    return {post_id: int(count) for post_id, count in rows}


def view_counts(db: Session, post_ids: Iterable[int]) -> dict[int, int]:
    """Return distinct-viewer counts for many posts in one grouped query."""
    ids = list(post_ids)
    if not ids:
        return {}
    rows = (
        db.query(PostView.post_id, func.count(func.distinct(PostView.user_id)))
        .filter(PostView.post_id.in_(ids), PostView.user_id.is_not(None))
        .group_by(PostView.post_id)
        .all()
    )
    return {post_id: int(count) for post_id, count in rows}


def follower_count(db: Session, user_id: int) -> int:
    """Return how many users follow ``user_id``."""
    return (
        db.query(func.count(Follow.id)).filter(Follow.following_id == user_id).scalar() or 0
    )


def following_count(db: Session, user_id: int) -> int:
    """Return how many users ``user_id`` follows."""
    return (
        db.query(func.count(Follow.id)).filter(Follow.follower_id == user_id).scalar() or 0
    )