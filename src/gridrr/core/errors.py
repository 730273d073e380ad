"""Domain exceptions raised by the service layer.

Each exception carries the HTTP status it maps to so the API layer can
translate failures without knowing which service raised them.
"""

from __future__ import annotations


class GridrrError(RuntimeError):
    """Base exception for expected, request-scoped failures."""

    status_code: int = 500

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class NotFoundError(GridrrError):
    """Raised when a referenced post, user or profile does not exist."""

    status_code = 404


class InvalidOperationError(GridrrError):
    """Raised for requests the caller must correct (self-follow, missing fields)."""

    status_code = 400


class AuthenticationError(GridrrError):
    """Raised when supplied credentials do not match."""

    status_code = 401


class DuplicateError(GridrrError):
    """Raised when a unique business key (such as an email) is already taken."""

    status_code = 409


class StorageUnavailableError(GridrrError):
    """Raised when the persistence layer cannot be reached or times out.

    Safe to retry at the caller's discretion; nothing retries automatically.
    """

    status_code = 500
