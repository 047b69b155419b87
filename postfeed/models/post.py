"""Post ORM — posts, their likes and their comments.

Invariants:
    - id is UUID primary key; user_id is the owner's opaque id and never updated
    - (post_id, user_id) is unique in post_likes: a user likes a post at most once
    - post_comments rows are only ever inserted (append-only), ordered by insertion id
    - Deleting a post deletes its likes and comments (ORM cascade + FK ondelete)

Design Decisions:
    - Likes as rows instead of a JSON array: toggling is a single DELETE or INSERT,
      concurrent likes by different users never overwrite each other
    - Comment author is a JSON snapshot of the commenter's profile at comment time
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    String, Text, Integer, DateTime, JSON, ForeignKey, UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from postfeed.core.domain_types import USER_ID_MAX_LENGTH
from postfeed.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Post(Base):
    """A captioned image published by one user."""
    __tablename__ = "posts"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    caption: Mapped[str] = mapped_column(String(100), nullable=False)
    image: Mapped[str] = mapped_column(Text, nullable=False)
    user_id: Mapped[str] = mapped_column(
        String(USER_ID_MAX_LENGTH), nullable=False, index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, index=True,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow,
    )

    likes: Mapped[list["PostLike"]] = relationship(
        "PostLike", back_populates="post",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="PostLike.id",
    )
    comments: Mapped[list["PostComment"]] = relationship(
        "PostComment", back_populates="post",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="PostComment.id",
    )


class PostLike(Base):
    """One user's like on one post."""
    __tablename__ = "post_likes"
    __table_args__ = (
        UniqueConstraint("post_id", "user_id", name="uq_post_likes_post_user"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    post_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    user_id: Mapped[str] = mapped_column(String(USER_ID_MAX_LENGTH), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )

    post: Mapped["Post"] = relationship("Post", back_populates="likes")


class PostComment(Base):
    """A comment with a point-in-time copy of its author's public profile."""
    __tablename__ = "post_comments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    post_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    author: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )

    post: Mapped["Post"] = relationship("Post", back_populates="comments")
