# src/gridrr/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .post import (
    CommentCreate,
    CommentPage,
    CommentResponse,
    LikeToggleResponse,
    PostAuthor,
    PostCreate,
    PostDetail,
    PostResponse,
    PostSummary,
)
from .profile import FollowToggleResponse, FollowUser, ProfileResponse, ProfileUpdate
from .user import (
    AccessTokenResponse,
    AuthResponse,
    LoginRequest,
    MessageResponse,
    PasswordChangeRequest,
    SignupRequest,
    UserResponse,
    UserUpdate,
)
from .verification import SweepResponse, VerificationActionResponse

__all__ = [
    "CommentCreate", "CommentPage", "CommentResponse",
    "LikeToggleResponse",
    "PostAuthor", "PostCreate", "PostDetail", "PostResponse", "PostSummary",
    "FollowToggleResponse", "FollowUser", "ProfileResponse", "ProfileUpdate",
    "AccessTokenResponse", "AuthResponse", "LoginRequest", "MessageResponse",
    "PasswordChangeRequest", "SignupRequest", "UserResponse", "UserUpdate",
    "SweepResponse", "VerificationActionResponse",
]
