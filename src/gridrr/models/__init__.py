# src/gridrr/models/__init__.py
"""SQLAlchemy models for the Gridrr application."""

from .comment import Comment
from .engagement import Follow, PostLike, PostView
from .post import Post
from .profile import Profile
from .user import User

__all__ = [
    "Comment",
    "Follow", "PostLike", "PostView",
    "Post",
    "Profile",
    "User",
]
