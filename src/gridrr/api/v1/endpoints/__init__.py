"""API endpoint modules for version 1."""

from .auth import router as auth_router
from .posts import router as posts_router
from .profiles import router as profiles_router
from .system import router as system_router
from .verification import router as verification_router

__all__ = [
    "auth_router",
    "posts_router",
    "profiles_router",
    "system_router",
    "verification_router",
]
