"""Tests for the engagement ledger."""

import pytest
from sqlalchemy import func

from gridrr.core.errors import InvalidOperationError, NotFoundError
from gridrr.models import Follow, PostLike, PostView
from gridrr.services import engagement


def _rows(db_session, model) -> int:
    return db_session.query(func.count(model.id)).scalar()


def test_repeated_views_are_recorded_once(db_session, user, make_post) -> None:
    post = make_post(user)

    results = [engagement.record_view(db_session, post.id, user.id) for _ in range(3)]

    assert results == [True, False, False]
    assert _rows(db_session, PostView) == 1
    assert engagement.view_count(db_session, post.id) == 1


def test_anonymous_view_is_not_recorded(db_session, user, make_post) -> None:
    post = make_post(user)

    assert engagement.record_view(db_session, post.id, None) is False
    assert _rows(db_session, PostView) == 0
    assert engagement.has_viewed(db_session, post.id, None) is False


def test_view_counts_are_distinct_per_viewer(db_session, user, other_user, make_post) -> None:
    post = make_post(user)
    quiet = make_post(user)

    engagement.record_view(db_session, post.id, user.id)
    engagement.record_view(db_session, post.id, other_user.id)
    engagement.record_view(db_session, post.id, other_user.id)

    assert engagement.view_counts(db_session, [post.id, quiet.id]) == {post.id: 2}


def test_toggle_like_twice_restores_state(db_session, user, other_user, make_post) -> None:
    post = make_post(other_user)

    assert engagement.toggle_like(db_session, post.id, user.id) is True
    assert engagement.has_liked(db_session, post.id, user.id) is True
    assert engagement.like_count(db_session, post.id) == 1

    assert engagement.toggle_like(db_session, post.id, user.id) is False
    assert engagement.has_liked(db_session, post.id, user.id) is False
    assert _rows(db_session, PostLike) == 0


def test_like_counts_batch(db_session, user, other_user, make_post) -> None:
    first = make_post(user)
    second = make_post(user)
    engagement.toggle_like(db_session, first.id, user.id)
    engagement.toggle_like(db_session, first.id, other_user.id)
    engagement.toggle_like(db_session, second.id, other_user.id)

    assert engagement.like_counts(db_session, [first.id, second.id]) == {
        first.id: 2,
        second.id: 1,
    }
    assert engagement.like_counts(db_session, []) == {}


def test_toggle_like_on_missing_post(db_session, user) -> None:
    with pytest.raises(NotFoundError):
        engagement.toggle_like(db_session, 9999, user.id)


def test_self_follow_is_rejected(db_session, user) -> None:
    with pytest.raises(InvalidOperationError):
        engagement.toggle_follow(db_session, user.id, user.id)

    assert _rows(db_session, Follow) == 0


def test_follow_unknown_user(db_session, user) -> None:
    with pytest.raises(NotFoundError):
        engagement.toggle_follow(db_session, user.id, 9999)


def test_toggle_follow_and_counts(db_session, user, other_user) -> None:
    assert engagement.toggle_follow(db_session, user.id, other_user.id) is True
    assert engagement.is_following(db_session, user.id, other_user.id) is True
    assert engagement.is_following(db_session, other_user.id, user.id) is False
    assert engagement.follower_count(db_session, other_user.id) == 1
    assert engagement.following_count(db_session, user.id) == 1

    assert engagement.toggle_follow(db_session, user.id, other_user.id) is False
    assert engagement.follower_count(db_session, other_user.id) == 0


def test_is_following_false_for_anonymous_or_self(db_session, user) -> None:
    assert engagement.is_following(db_session, None, user.id) is False
    assert engagement.is_following(db_session, user.id, user.id) is False
