"""Feed query engine: text search, tag filtering and sort selection."""
from __future__ import annotations

import logging
from collections.abc import Iterable

from sqlalchemy.orm import Session

from gridrr.repositories.post_repo import PostRepository
from gridrr.schemas.post import PostSummary
from gridrr.services.posts import build_summaries
from gridrr.utils.tags import parse_tags

logger = logging.getLogger(__name__)

SORT_POPULAR = "popular"
SORT_LIKED = "liked"


def search_posts(
    db: Session,
    *,
    text: str | None = None,
    tags: str | Iterable[str] | None = None,
    sort: str | None = None,
) -> list[PostSummary]:
    """Return posts matching the filters, with derived counts.

    Args:
        db: Database session.
        text: Case-insensitive substring matched against titles.
        tags: Tags to match; a post qualifies if it has any of them.
        sort: ``"popular"`` (views) or ``"liked"`` (likes); anything else keeps
            newest-first order.

    Returns:
        Post summaries. Re-sorting is stable, so ties stay newest first.
    """
    query_text = text.strip() if text else None
    tag_list = parse_tags(tags, dedupe=True)

    posts = PostRepository(db).search(text=query_text or None, tags=tag_list)
    if tag_list:
        wanted = set(tag_list)
        posts = [post for post in posts if wanted.intersection(post.tags)]

    summaries = build_summaries(db, posts)

    if sort == SORT_POPULAR:
        summaries.sort(key=lambda summary: summary.views, reverse=True)
    elif sort == SORT_LIKED:
        summaries.sort(key=lambda summary: summary.likes, reverse=True)

    logger.debug(
        "Feed query text=%r tags=%s sort=%s returned %d post(s)",
        query_text,
        tag_list,
        sort,
        len(summaries),
    )
    return summaries
