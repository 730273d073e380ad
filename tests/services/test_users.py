"""Tests for account services."""

import pytest

from gridrr.core.errors import (
    AuthenticationError,
    DuplicateError,
    InvalidOperationError,
    NotFoundError,
)
from gridrr.core.security import verify_password
from gridrr.services import users as user_service

SIGNUP = {
    "first_name": "Ada",
    "last_name": "Lovelace",
    "email": "Ada@Example.com",
    "password": "engine-no-2",
    "accepted_terms": True,
}


def test_create_user_normalizes_email_and_hashes_password(db_session) -> None:
    user = user_service.create_user(db_session, **SIGNUP)

    assert user.id is not None
    assert user.email == "ada@example.com"
    assert user.password_hash != SIGNUP["password"]
    assert verify_password(SIGNUP["password"], user.password_hash)
    assert user.verified is False
    assert user.verification_requested is False


@pytest.mark.parametrize("missing", ["first_name", "last_name", "email", "password"])
def test_create_user_requires_all_fields(db_session, missing) -> None:
    with pytest.raises(InvalidOperationError):
        user_service.create_user(db_session, **{**SIGNUP, missing: "  "})


def test_create_user_requires_terms(db_session) -> None:
    with pytest.raises(InvalidOperationError):
        user_service.create_user(db_session, **{**SIGNUP, "accepted_terms": False})


def test_create_user_rejects_duplicate_email(db_session) -> None:
    user_service.create_user(db_session, **SIGNUP)
    with pytest.raises(DuplicateError):
        user_service.create_user(db_session, **{**SIGNUP, "email": "ADA@example.com "})


def test_authenticate(db_session) -> None:
    created = user_service.create_user(db_session, **SIGNUP)

    assert user_service.authenticate(db_session, "ada@example.com", "engine-no-2").id == created.id
    with pytest.raises(AuthenticationError):
        user_service.authenticate(db_session, "ada@example.com", "wrong")
    with pytest.raises(NotFoundError):
        user_service.authenticate(db_session, "nobody@example.com", "engine-no-2")
    with pytest.raises(InvalidOperationError):
        user_service.authenticate(db_session, "", "engine-no-2")


def test_update_user_ignores_blank_fields(db_session, user) -> None:
    updated = user_service.update_user(db_session, user, first_name="Augusta", last_name="  ")

    assert updated.first_name == "Augusta"
    assert updated.last_name == "Lovelace"


def test_update_user_email_conflict(db_session, user, other_user) -> None:
    with pytest.raises(DuplicateError):
        user_service.update_user(db_session, user, email=other_user.email.upper())


def test_change_password(db_session) -> None:
    user = user_service.create_user(db_session, **SIGNUP)

    with pytest.raises(AuthenticationError):
        user_service.change_password(
            db_session, user, current_password="nope", new_password="next"
        )

    user_service.change_password(
        db_session, user, current_password="engine-no-2", new_password="next"
    )
    assert user_service.authenticate(db_session, "ada@example.com", "next").id == user.id
