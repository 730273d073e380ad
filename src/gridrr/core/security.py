"""Password hashing and JWT helpers."""
from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

from jose import JWTError, jwt
from passlib.hash import pbkdf2_sha256

from gridrr.core.settings import settings

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


def hash_password(password: str) -> str:
    """Return a salted PBKDF2 hash of ``password``."""
    return pbkdf2_sha256.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Return True if ``password`` matches the stored hash."""
    try:
        return pbkdf2_sha256.verify(password, password_hash)
    except ValueError:
        # Malformed or foreign hash format.
        return False


def create_access_token(user_id: int, email: str) -> str:
    """Create a short-lived JWT access token for user authentication."""
    expire = datetime.now(UTC) + timedelta(minutes=settings.access_token_expire_minutes)
    to_encode: dict[str, Any] = {
        "sub": str(user_id),
        "email": email,
        "type": ACCESS_TOKEN_TYPE,
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.jwt_algorithm)


def create_refresh_token(user_id: int) -> str:
    """Create a long-lived JWT used only to mint new access tokens."""
    expire = datetime.now(UTC) + timedelta(days=settings.refresh_token_expire_days)
    to_encode: dict[str, Any] = {
        "sub": str(user_id),
        "type": REFRESH_TOKEN_TYPE,
        "exp": expire,
    }
    return jwt.encode(
        to_encode,
        settings.effective_refresh_secret,
        algorithm=settings.jwt_algorithm,
    )


def decode_token(token: str, *, token_type: str = ACCESS_TOKEN_TYPE) -> int:
    """Decode a token and return the user id it was issued for.

    Args:
        token: Encoded JWT.
        token_type: Expected ``type`` claim.

    Returns:
        The integer user id from the ``sub`` claim.

    Raises:
        JWTError: If the signature, expiry, type or subject is invalid.
    """
    secret = (
        settings.effective_refresh_secret
        if token_type == REFRESH_TOKEN_TYPE
        else settings.secret_key
    )
    payload = jwt.decode(token, secret, algorithms=[settings.jwt_algorithm])
    if payload.get("type") != token_type:
        raise JWTError("Unexpected token type")
    subject = payload.get("sub")
    if subject is None:
        raise JWTError("Token has no subject")
    try:
        return int(subject)
    except (TypeError, ValueError) as err:
        raise JWTError("Token subject is not a user id") from err
