"""Post creation, aggregate reads and comments."""
from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from sqlalchemy import desc, func
from sqlalchemy.orm import Session

from gridrr.core.errors import InvalidOperationError, NotFoundError
from gridrr.core.settings import settings
from gridrr.models import Comment, Post, User
from gridrr.repositories.post_repo import PostRepository
from gridrr.schemas.post import (
    AuthorProfile,
    CommentPage,
    CommentResponse,
    PostAuthor,
    PostDetail,
    PostSummary,
)
from gridrr.services import engagement
from gridrr.utils.tags import parse_tags

logger = logging.getLogger(__name__)

__all__ = [
    "create_post",
    "get_post",
    "list_by_user",
    "build_summaries",
    "add_comment",
    "list_comments",
]


def create_post(
    db: Session,
    *,
    user_id: int,
    title: str | None,
    tags: str | Iterable[str] | None = None,
    image_urls: Sequence[str] | None = None,
) -> Post:
    """Validate input and persist a new post.

    Args:
        db: Database session.
        user_id: Authenticated author.
        title: Post title; surrounding whitespace is trimmed.
        tags: List, JSON array string or comma-separated string.
        image_urls: Public URLs returned by the blob-storage collaborator.

    Returns:
        The stored post.

    Raises:
        InvalidOperationError: If the title is blank or no image URL is given.
    """
    clean_title = (title or "").strip()
    if not clean_title:
        raise InvalidOperationError("Title is required.")

    urls = [url.strip() for url in image_urls or () if url and url.strip()]
    if not urls:
        raise InvalidOperationError("At least one image is required.")
    if len(urls) > settings.max_images_per_post:
        raise InvalidOperationError(
            f"A post can have at most {settings.max_images_per_post} images."
        )

    post = PostRepository(db).create(
        user_id=user_id,
        title=clean_title,
        tags=parse_tags(tags),
        image_urls=urls,
    )
    db.commit()
    db.refresh(post)
    logger.info("User %s created post %s with %d image(s)", user_id, post.id, len(urls))
    return post


def get_post(db: Session, post_id: int, viewer_id: int | None = None) -> PostDetail:
    """Assemble the full read view of a post, recording the viewer's visit.

    Counts and viewer flags come from separate queries without a shared
    transaction, so they may straddle a concurrent write.

    Raises:
        NotFoundError: If the post does not exist.
    """
    repo = PostRepository(db)
    if not repo.exists(post_id):
        raise NotFoundError("Post not found")

    engagement.record_view(db, post_id, viewer_id)

    post = repo.get_by_id(post_id)
    if post is None:
        # Deleted between the view insert and the read.
        raise NotFoundError("Post not found")

    author = post.author
    author_block: PostAuthor | None = None
    if author is not None:
        author_block = PostAuthor(
            id=author.id,
            first_name=author.first_name,
            last_name=author.last_name,
            verified=author.verified,
            profile=(
                AuthorProfile.model_validate(author.profile) if author.profile else None
            ),
            is_following=engagement.is_following(db, viewer_id, author.id),
        )

    return PostDetail(
        id=post.id,
        user_id=post.user_id,
        title=post.title,
        tags=post.tags,
        image_urls=post.image_urls,
        created_at=post.created_at,
        likes=engagement.like_count(db, post_id),
        views=engagement.view_count(db, post_id),
        user=author_block,
        user_has_liked=engagement.has_liked(db, post_id, viewer_id),
        user_has_viewed=engagement.has_viewed(db, post_id, viewer_id),
    )


def build_summaries(db: Session, posts: Sequence[Post]) -> list[PostSummary]:
    """Attach derived view and like counts to ``posts``, keeping their order."""
    ids = [post.id for post in posts]
    views = engagement.view_counts(db, ids)
    likes = engagement.like_counts(db, ids)
    return [
        PostSummary(
            id=post.id,
            user_id=post.user_id,
            title=post.title,
            tags=post.tags,
            image_urls=post.image_urls,
            created_at=post.created_at,
            views=views.get(post.id, 0),
            likes=likes.get(post.id, 0),
        )
        for post in posts
    ]


def list_by_user(db: Session, user_id: int) -> list[PostSummary]:
    """Return a user's posts, newest first, with view and like counts."""
    return build_summaries(db, PostRepository(db).list_by_user(user_id))


def add_comment(db: Session, *, post_id: int, user_id: int, content: str | None) -> CommentResponse:
    """Append a comment to a post.

    Raises:
        InvalidOperationError: If the content is blank.
        NotFoundError: If the post does not exist.
    """
    text = (content or "").strip()
    if not text:
        raise InvalidOperationError("Content is required.")
    if not PostRepository(db).exists(post_id):
        raise NotFoundError("Post not found")

    comment = Comment(post_id=post_id, user_id=user_id, content=text)
    db.add(comment)
    db.commit()
    db.refresh(comment)

    author = db.get(User, user_id)
    return CommentResponse(
        id=comment.id,
        post_id=comment.post_id,
        user_id=comment.user_id,
        content=comment.content,
        created_at=comment.created_at,
        first_name=author.first_name if author else None,
        last_name=author.last_name if author else None,
    )


def list_comments(db: Session, post_id: int, limit: int = 10, offset: int = 0) -> CommentPage:
    """Return one page of a post's comments, newest first, and the total count."""
    if not PostRepository(db).exists(post_id):
        raise NotFoundError("Post not found")

    total = db.query(func.count(Comment.id)).filter(Comment.post_id == post_id).scalar() or 0
    rows = (
        db.query(Comment, User.first_name, User.last_name)
        .outerjoin(User, User.id == Comment.user_id)
        .filter(Comment.post_id == post_id)
        .order_by(desc(Comment.created_at), desc(Comment.id))
        .offset(offset)
        .limit(limit)
        .all()
    )
    comments = [
        CommentResponse(
            id=comment.id,
            post_id=comment.post_id,
            user_id=comment.user_id,
            content=comment.content,
            created_at=comment.created_at,
            first_name=first_name,
            last_name=last_name,
        )
        for comment, first_name, last_name in rows
    ]
    return CommentPage(data=comments, total=int(total))
