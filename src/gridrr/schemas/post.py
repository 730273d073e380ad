# src/gridrr/schemas/post.py
"""Post-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class PostCreate(BaseModel):
    """Schema for creating a new post.

    ``title`` is validated by the service so a missing title is reported as a
    400 rather than a schema error.
    """

    title: str | None = Field(None, max_length=255, description="Post title")
    tags: list[str] | str | None = Field(
        None,
        description="Tag list, JSON array string or comma-separated string",
    )
    image_urls: list[str] = Field(
        default_factory=list,
        description="Public URLs of images already uploaded to blob storage",
    )


class PostResponse(BaseModel):
    """Schema for a stored post."""

    id: int
    user_id: int
    title: str
    tags: list[str]
    image_urls: list[str]
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PostSummary(BaseModel):
    """Feed row: post fields plus derived counts."""

    id: int
    user_id: int
    title: str
    tags: list[str]
    image_urls: list[str]
    created_at: datetime
    views: int = 0
    likes: int = 0


class AuthorProfile(BaseModel):
    """Subset of the author's profile embedded in post reads."""

    display_name: str | None = None
    profile_type: str | None = None
    website: str | None = None
    contact_email: str | None = None
    bio: str | None = None
    expertise: str | None = None
    avatar_url: str | None = None
    twitter: str | None = None
    instagram: str | None = None
    linkedin: str | None = None
    facebook: str | None = None

    model_config = ConfigDict(from_attributes=True)


class PostAuthor(BaseModel):
    """Author block of a post aggregate."""

    id: int
    first_name: str
    last_name: str
    verified: bool = False
    profile: AuthorProfile | None = None
    is_following: bool = False


class PostDetail(PostSummary):
    """Full aggregate read of a single post for a (possibly anonymous) viewer."""

    user: PostAuthor | None = None
    user_has_liked: bool = False
    user_has_viewed: bool = False


class LikeToggleResponse(BaseModel):
    """Like state after a toggle."""

    liked: bool


class CommentCreate(BaseModel):
    """Schema for adding a comment."""

    content: str | None = Field(None, max_length=5000)


class CommentResponse(BaseModel):
    """A comment with its author's name."""

    id: int
    post_id: int
    user_id: int
    content: str
    created_at: datetime
    first_name: str | None = None
    last_name: str | None = None


class CommentPage(BaseModel):
    """One page of comments plus the total for the post."""

    data: list[CommentResponse]
    total: int
