"""Account registration, authentication and account maintenance."""
from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from gridrr.core.errors import (
    AuthenticationError,
    DuplicateError,
    InvalidOperationError,
    NotFoundError,
)
from gridrr.core.security import hash_password, verify_password
from gridrr.models import User

logger = logging.getLogger(__name__)


def _normalize_email(email: str) -> str:
    return email.strip().lower()


def get_user(db: Session, user_id: int) -> User:
    """Return the user with ``user_id`` or raise ``NotFoundError``."""
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


def get_user_by_email(db: Session, email: str) -> User | None:
    """Return the user registered under ``email`` (case-insensitive), if any."""
    return db.query(User).filter(User.email == _normalize_email(email)).first()


def create_user(
    db: Session,
    *,
    first_name: str | None,
    last_name: str | None,
    email: str | None,
    password: str | None,
    accepted_terms: bool,
) -> User:
    """Register a new account.

    Args:
        db: Database session.
        first_name: Given name.
        last_name: Family name.
        email: Login email, stored lower-cased.
        password: Plain-text password; only its hash is stored.
        accepted_terms: Whether the user accepted the terms of service.

    Returns:
        The stored user.

    Raises:
        InvalidOperationError: If a field is blank or the terms were not accepted.
        DuplicateError: If the email is already registered.
    """
    first = (first_name or "").strip()
    last = (last_name or "").strip()
    address = _normalize_email(email or "")
    if not (first and last and address and password and password.strip()):
        raise InvalidOperationError("All fields are required")
    if not accepted_terms:
        raise InvalidOperationError("You must accept the terms and conditions")

    if get_user_by_email(db, address) is not None:
        raise DuplicateError("User already exists")

    user = User(
        first_name=first,
        last_name=last,
        email=address,
        password_hash=hash_password(password),
        accepted_terms=True,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as err:
        # Lost a race with a concurrent signup for the same email.
        db.rollback()
        raise DuplicateError("User already exists") from err
    db.refresh(user)
    logger.info("Registered user %s", user.id)
    return user


def authenticate(db: Session, email: str | None, password: str | None) -> User:
    """Return the user whose credentials match.

    Raises:
        InvalidOperationError: If email or password is missing.
        NotFoundError: If no account uses ``email``.
        AuthenticationError: If the password is wrong.
    """
    if not email or not password:
        raise InvalidOperationError("Email and password are required")

    user = get_user_by_email(db, email)
    if user is None:
        raise NotFoundError("User not found")
    if not verify_password(password, user.password_hash):
        logger.info("Failed login for user %s", user.id)
        raise AuthenticationError("Invalid credentials")
    return user


def update_user(
    db: Session,
    user: User,
    *,
    first_name: str | None = None,
    last_name: str | None = None,
    email: str | None = None,
) -> User:
    """Apply non-empty account field changes to ``user``.

    Raises:
        DuplicateError: If the new email belongs to another account.
    """
    if first_name and first_name.strip():
        user.first_name = first_name.strip()
    if last_name and last_name.strip():
        user.last_name = last_name.strip()
    if email and email.strip():
        new_email = _normalize_email(email)
        if new_email != user.email:
            existing = get_user_by_email(db, new_email)
            if existing is not None and existing.id != user.id:
                raise DuplicateError("Email is already in use")
            user.email = new_email

    try:
        db.commit()
    except IntegrityError as err:
        db.rollback()
        raise DuplicateError("Email is already in use") from err
    db.refresh(user)
    return user


def change_password(
    db: Session,
    user: User,
    *,
    current_password: str | None,
    new_password: str | None,
) -> None:
    """Replace ``user``'s password after checking the current one.

    Raises:
        InvalidOperationError: If either password is missing.
        AuthenticationError: If ``current_password`` does not match.
    """
    if not current_password or not new_password:
        raise InvalidOperationError("Current and new password are required")
    if not verify_password(current_password, user.password_hash):
        raise AuthenticationError("Current password is incorrect")

    user.password_hash = hash_password(new_password)
    db.commit()
    logger.info("Password changed for user %s", user.id)
