"""Data access helpers for working with posts."""
from __future__ import annotations

import json
from collections.abc import Sequence

from sqlalchemy import Text, desc, func, or_, type_coerce
from sqlalchemy.orm import Session

from gridrr.models.post import Post

__all__ = ["PostRepository"]


class PostRepository:
    """Thin wrapper around database access for post entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_id(self, post_id: int) -> Post | None:
        """Return a post by identifier."""
        return self.session.get(Post, post_id)

    def exists(self, post_id: int) -> bool:
        """Return True if a post with ``post_id`` exists."""
        return (
            self.session.query(Post.id).filter(Post.id == post_id).first() is not None
        )

    def search(
        self,
        *,
        text: str | None = None,
        tags: Sequence[str] = (),
    ) -> list[Post]:
        """Return posts newest first, narrowed by title text and tag candidates.

        The tag clause is a coarse pre-filter over the serialized column: it may
        return posts whose tags only contain the search tag as part of a longer
        escaped string, so callers confirm membership on the decoded list.
        """
        query = self.session.query(Post)

        if text:
            query = query.filter(Post.title.icontains(text, autoescape=True))

        if tags:
            serialized = type_coerce(Post.tags, Text)
            query = query.filter(
                or_(*(serialized.contains(json.dumps(tag), autoescape=True) for tag in tags))
            )

        return query.order_by(desc(Post.created_at), desc(Post.id)).all()

    def list_by_user(self, user_id: int) -> list[Post]:
        """Return every post owned by ``user_id``, newest first."""
        return (
            self.session.query(Post)
            .filter(Post.user_id == user_id)
            .order_by(desc(Post.created_at), desc(Post.id))
            .all()
        )

    def count_by_user(self, user_id: int) -> int:
        """Return how many posts ``user_id`` has authored."""
        return (
            self.session.query(func.count(Post.id)).filter(Post.user_id == user_id).scalar()
            or 0
        )

    def create(
        self,
        *,
        user_id: int,
        title: str,
        tags: list[str],
        image_urls: list[str],
    ) -> Post:
        """Insert a new post and return the persisted ORM instance.

        Args:
            user_id: Owning user.
            title: Trimmed, non-empty title.
            tags: Ordered tag list.
            image_urls: Ordered public image URLs supplied by the upload collaborator.
        """
        post = Post(user_id=user_id, title=title, tags=tags, image_urls=image_urls)
        self.session.add(post)
        self.session.flush()
        return post
