"""Post, feed, like and comment endpoints for the Gridrr API."""

from __future__ import annotations

from fastapi import APIRouter, Query, status

from gridrr.api.v1.dependencies import CurrentUserDep, OptionalUserDep, SessionDep
from gridrr.models import Post
from gridrr.schemas.post import (
    CommentCreate,
    CommentPage,
    CommentResponse,
    LikeToggleResponse,
    PostCreate,
    PostDetail,
    PostResponse,
    PostSummary,
)
from gridrr.services import engagement, feed
from gridrr.services import posts as post_service

router = APIRouter(prefix="/posts", tags=["posts"])


@router.get("", response_model=list[PostSummary])
def list_posts(
    db: SessionDep,
    q: str | None = Query(None, description="Case-insensitive title search"),
    tags: list[str] | None = Query(
        None,
        description="Tags to match; repeat the key or comma-separate, any may match",
    ),
    sort: str | None = Query(None, description="'popular' (views) or 'liked' (likes)"),
) -> list[PostSummary]:
    """List posts newest first, optionally filtered and re-sorted."""
    return feed.search_posts(db, text=q, tags=tags, sort=sort)


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
def create_post(payload: PostCreate, current_user: CurrentUserDep, db: SessionDep) -> Post:
    """Create a post for the authenticated user from already-uploaded image URLs."""
    return post_service.create_post(
        db,
        user_id=current_user.id,
        title=payload.title,
        tags=payload.tags,
        image_urls=payload.image_urls,
    )


@router.get("/user/{user_id}", response_model=list[PostSummary])
def list_user_posts(user_id: int, db: SessionDep) -> list[PostSummary]:
    """List a user's posts, newest first, with view and like counts."""
    return post_service.list_by_user(db, user_id)


@router.get("/{post_id}", response_model=PostDetail)
def get_post(post_id: int, db: SessionDep, viewer: OptionalUserDep) -> PostDetail:
    """Return a post aggregate; signed-in viewers are recorded as having viewed it."""
    return post_service.get_post(db, post_id, viewer.id if viewer else None)


@router.post("/{post_id}/like", response_model=LikeToggleResponse)
def toggle_like(post_id: int, current_user: CurrentUserDep, db: SessionDep) -> LikeToggleResponse:
    """Like the post, or remove an existing like."""
    liked = engagement.toggle_like(db, post_id, current_user.id)
    return LikeToggleResponse(liked=liked)


@router.get("/{post_id}/comments", response_model=CommentPage)
def list_comments(
    post_id: int,
    db: SessionDep,
    limit: int = Query(10, ge=1, le=100),
    offset: int = Query(0, ge=0),
) -> CommentPage:
    """Return one page of comments, newest first."""
    return post_service.list_comments(db, post_id, limit=limit, offset=offset)


@router.post(
    "/{post_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_comment(
    post_id: int,
    payload: CommentCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> CommentResponse:
    """Add a comment to a post."""
    return post_service.add_comment(
        db,
        post_id=post_id,
        user_id=current_user.id,
        content=payload.content,
    )
