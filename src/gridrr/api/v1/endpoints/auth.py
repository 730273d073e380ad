"""Authentication and account endpoints for the Gridrr API."""

from __future__ import annotations

from fastapi import APIRouter, Cookie, HTTPException, Response, status
from jose import JWTError

from gridrr.api.v1.dependencies import CurrentUserDep, SessionDep
from gridrr.core.security import (
    REFRESH_TOKEN_TYPE,
    create_access_token,
    create_refresh_token,
    decode_token,
)
from gridrr.core.settings import settings
from gridrr.models import User
from gridrr.schemas.user import (
    AccessTokenResponse,
    AuthResponse,
    LoginRequest,
    MessageResponse,
    PasswordChangeRequest,
    SignupRequest,
    UserResponse,
    UserUpdate,
)
from gridrr.services import users as user_service

router = APIRouter(prefix="/auth", tags=["authentication"])


def _issue_tokens(response: Response, user: User, message: str) -> AuthResponse:
    """Set the refresh cookie and build the auth payload for ``user``."""
    response.set_cookie(
        key=settings.refresh_cookie_name,
        value=create_refresh_token(user.id),
        max_age=settings.refresh_token_expire_days * 24 * 60 * 60,
        httponly=True,
        secure=settings.secure_cookies,
        samesite="lax",
    )
    return AuthResponse(
        message=message,
        user=UserResponse.model_validate(user),
        access_token=create_access_token(user.id, user.email),
    )


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def signup(payload: SignupRequest, response: Response, db: SessionDep) -> AuthResponse:
    """Register a new account and sign it in."""
    user = user_service.create_user(
        db,
        first_name=payload.first_name,
        last_name=payload.last_name,
        email=payload.email,
        password=payload.password,
        accepted_terms=payload.accepted_terms,
    )
    return _issue_tokens(response, user, "User created successfully")


@router.post("/login", response_model=AuthResponse)
def login(payload: LoginRequest, response: Response, db: SessionDep) -> AuthResponse:
    """Exchange email and password for an access token and refresh cookie."""
    user = user_service.authenticate(db, payload.email, payload.password)
    return _issue_tokens(response, user, "Login successful")


@router.post("/refresh", response_model=AccessTokenResponse)
def refresh(
    db: SessionDep,
    refresh_token: str | None = Cookie(None, alias=settings.refresh_cookie_name),
) -> AccessTokenResponse:
    """Mint a new access token from the refresh cookie."""
    if not refresh_token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Refresh token missing",
        )
    try:
        user_id = decode_token(refresh_token, token_type=REFRESH_TOKEN_TYPE)
    except JWTError as err:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid refresh token",
        ) from err

    user = db.get(User, user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid refresh token",
        )
    return AccessTokenResponse(access_token=create_access_token(user.id, user.email))


@router.post("/logout", response_model=MessageResponse)
def logout(response: Response) -> MessageResponse:
    """Clear the refresh cookie."""
    response.delete_cookie(settings.refresh_cookie_name)
    return MessageResponse(message="Logged out successfully")


@router.get("/me", response_model=UserResponse)
def read_me(current_user: CurrentUserDep) -> User:
    """Return the authenticated account."""
    return current_user


@router.put("/me", response_model=UserResponse)
def update_me(payload: UserUpdate, current_user: CurrentUserDep, db: SessionDep) -> User:
    """Update the authenticated account's name or email."""
    return user_service.update_user(
        db,
        current_user,
        first_name=payload.first_name,
        last_name=payload.last_name,
        email=payload.email,
    )


@router.post("/change-password", response_model=MessageResponse)
def change_password(
    payload: PasswordChangeRequest,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> MessageResponse:
    """Change the authenticated account's password."""
    user_service.change_password(
        db,
        current_user,
        current_password=payload.current_password,
        new_password=payload.new_password,
    )
    return MessageResponse(message="Password updated successfully")
