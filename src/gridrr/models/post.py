# src/gridrr/models/post.py
"""SQLAlchemy model for posts."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gridrr.db.session import Base
from gridrr.db.time import utcnow
from gridrr.db.types import JSONList

if TYPE_CHECKING:
    from .user import User


class Post(Base):
    """Primary content entity owned by a single user.

    Like and view totals are not stored here; they are always counted from the
    ledger tables at read time.
    """

    __tablename__ = "posts"
    __table_args__ = (
        Index("ix_posts_user_id", "user_id"),
        Index("ix_posts_created_at", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    # Ordered lists serialized as JSON text.
    tags: Mapped[list[str]] = mapped_column(JSONList, nullable=False, default=list)
    image_urls: Mapped[list[str]] = mapped_column(JSONList, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    author: Mapped[User] = relationship("User", back_populates="posts")
