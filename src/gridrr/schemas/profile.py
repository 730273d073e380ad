# src/gridrr/schemas/profile.py
"""Profile and follow Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field


class ProfileUpdate(BaseModel):
    """Fields a user may set on their profile; omitted fields are left unchanged."""

    display_name: str | None = Field(None, max_length=100)
    profile_type: str | None = Field(None, max_length=20)
    website: str | None = Field(None, max_length=255)
    contact_email: str | None = Field(None, max_length=255)
    bio: str | None = None
    expertise: str | None = None
    avatar_url: str | None = Field(None, max_length=255)
    twitter: str | None = Field(None, max_length=100)
    instagram: str | None = Field(None, max_length=100)
    linkedin: str | None = Field(None, max_length=255)
    facebook: str | None = Field(None, max_length=255)


class ProfileResponse(ProfileUpdate):
    """Profile with follow counts as seen by a (possibly anonymous) viewer."""

    user_id: int
    follower_count: int = 0
    following_count: int = 0
    is_following: bool = False

    model_config = ConfigDict(from_attributes=True)


class FollowUser(BaseModel):
    """Entry in a followers/following list."""

    id: int
    first_name: str
    last_name: str
    display_name: str | None = None
    avatar_url: str | None = None
    expertise: str | None = None


class FollowToggleResponse(BaseModel):
    """Follow state after a toggle."""

    following: bool
