"""Verification threshold job and admin verification actions.

The sweep is a one-way latch: a user who meets every threshold gets
``verification_requested`` set, and the selection predicate keeps flagged or
verified users out of later sweeps, so re-running with no new activity writes
nothing. Only an admin action clears the flag.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy import func
from sqlalchemy.orm import Session

from gridrr.core.errors import NotFoundError
from gridrr.core.settings import Settings, settings
from gridrr.models import Post, PostLike, User
from gridrr.repositories.post_repo import PostRepository
from gridrr.services import engagement

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VerificationThresholds:
    """Minimum totals a user needs before verification is requested."""

    min_posts: int = 100
    min_followers: int = 1000
    min_likes: int = 1000

    @classmethod
    def from_settings(cls, config: Settings = settings) -> VerificationThresholds:
        """Build thresholds from application settings."""
        return cls(
            min_posts=config.verification_min_posts,
            min_followers=config.verification_min_followers,
            min_likes=config.verification_min_likes,
        )


@dataclass(frozen=True)
class EngagementTotals:
    """Aggregates the sweep compares against the thresholds."""

    posts: int
    followers: int
    likes: int

    def meets(self, thresholds: VerificationThresholds) -> bool:
        """Return True only if every total reaches its threshold."""
        return (
            self.posts >= thresholds.min_posts
            and self.followers >= thresholds.min_followers
            and self.likes >= thresholds.min_likes
        )


def total_likes_received(db: Session, user_id: int) -> int:
    """Return the number of likes across all of ``user_id``'s posts."""
    return (
        db.query(func.count(PostLike.id))
        .join(Post, Post.id == PostLike.post_id)
        .filter(Post.user_id == user_id)
        .scalar()
        or 0
    )


def engagement_totals(db: Session, user_id: int) -> EngagementTotals:
    """Compute post, follower and received-like totals for a user."""
    return EngagementTotals(
        posts=PostRepository(db).count_by_user(user_id),
        followers=engagement.follower_count(db, user_id),
        likes=total_likes_received(db, user_id),
    )


def _evaluate(db: Session, user: User, thresholds: VerificationThresholds) -> bool:
    totals = engagement_totals(db, user.id)
    if not totals.meets(thresholds):
        return False
    user.verification_requested = True
    logger.info(
        "Requesting verification for user %s (posts=%d followers=%d likes=%d)",
        user.id,
        totals.posts,
        totals.followers,
        totals.likes,
    )
    return True


def check_user(
    db: Session,
    user_id: int,
    thresholds: VerificationThresholds | None = None,
) -> bool:
    """Evaluate a single user and latch the request flag if thresholds are met.

    Returns:
        True if this call set ``verification_requested``. Missing, verified and
        already-requested users are skipped.
    """
    thresholds = thresholds or VerificationThresholds.from_settings()
    user = db.get(User, user_id)
    if user is None or user.verified or user.verification_requested:
        return False
    if not _evaluate(db, user, thresholds):
        return False
    db.commit()
    return True


def run_verification_sweep(
    db: Session,
    thresholds: VerificationThresholds | None = None,
) -> list[int]:
    """Scan every unverified, unrequested user and flag those over the thresholds.

    Args:
        db: Database session.
        thresholds: Override for the configured thresholds.

    Returns:
        Ids of users flagged by this run, in id order.
    """
    thresholds = thresholds or VerificationThresholds.from_settings()
    candidates = (
        db.query(User)
        .filter(User.verified.is_(False), User.verification_requested.is_(False))
        .order_by(User.id)
        .all()
    )

    flagged = [user.id for user in candidates if _evaluate(db, user, thresholds)]
    if flagged:
        db.commit()
    logger.info(
        "Verification sweep checked %d user(s), flagged %d",
        len(candidates),
        len(flagged),
    )
    return flagged


def list_requests(db: Session) -> list[User]:
    """Return users awaiting a verification decision."""
    return (
        db.query(User)
        .filter(User.verification_requested.is_(True), User.verified.is_(False))
        .order_by(User.id)
        .all()
    )


def _get_user_or_404(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


def approve(db: Session, user_id: int) -> User:
    """Mark a user verified and clear their pending request."""
    user = _get_user_or_404(db, user_id)
    user.verified = True
    user.verification_requested = False
    db.commit()
    logger.info("Verification approved for user %s", user_id)
    return user


def reject(db: Session, user_id: int) -> User:
    """Clear a user's pending request without verifying them."""
    user = _get_user_or_404(db, user_id)
    user.verification_requested = False
    db.commit()
    logger.info("Verification rejected for user %s", user_id)
    return user


def verify(db: Session, user_id: int) -> User:
    """Verify any user directly, whether or not they requested it."""
    return approve(db, user_id)


def unverify(db: Session, user_id: int) -> User:
    """Revoke a user's verified status."""
    user = _get_user_or_404(db, user_id)
    user.verified = False
    db.commit()
    logger.info("Verification revoked for user %s", user_id)
    return user
