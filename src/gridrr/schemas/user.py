# src/gridrr/schemas/user.py
"""Account-related Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field


class SignupRequest(BaseModel):
    """Schema for account registration.

    Fields are optional at the schema level; the service reports missing
    values with a single 400 message.
    """

    first_name: str | None = Field(None, max_length=100)
    last_name: str | None = Field(None, max_length=100)
    email: str | None = Field(None, max_length=255)
    password: str | None = None
    accepted_terms: bool = False


class LoginRequest(BaseModel):
    """Schema for login submissions."""

    email: str | None = None
    password: str | None = None


class UserResponse(BaseModel):
    """Public account information."""

    id: int
    first_name: str
    last_name: str
    email: str
    verified: bool
    verification_requested: bool

    model_config = ConfigDict(from_attributes=True)


class AuthResponse(BaseModel):
    """Response returned after signup or login."""

    message: str
    user: UserResponse
    access_token: str
    token_type: str = "bearer"


class AccessTokenResponse(BaseModel):
    """Fresh access token minted from a refresh token."""

    access_token: str
    token_type: str = "bearer"


class UserUpdate(BaseModel):
    """Schema for updating the current account."""

    first_name: str | None = Field(None, max_length=100)
    last_name: str | None = Field(None, max_length=100)
    email: str | None = Field(None, max_length=255)


class PasswordChangeRequest(BaseModel):
    """Schema for changing the current account's password."""

    current_password: str | None = None
    new_password: str | None = None


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str
