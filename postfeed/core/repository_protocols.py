"""Boundary Protocols — contracts between the feed service and persistence.

Invariants:
    - Services NEVER import SQLAlchemy — dependency arrows point inward only
    - Lookups return None for "not found"; store failures raise DatabaseError
    - toggle_like is a single atomic conditional mutation, never read-then-write

Design Decisions:
    - Protocol over ABC: structural subtyping, fakes in tests need no base class
    - Posts cross the boundary as PostRecord, a plain snapshot of one row
      with its likes and comments already attached
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Protocol

from postfeed.core.domain_types import LikeAction, PostId, UserId


@dataclass
class CommentRecord:
    """One comment as stored: author snapshot plus text."""
    author: dict
    comment: str
    created_at: datetime | None = None


@dataclass
class PostRecord:
    """Snapshot of a post as returned by a PostRepository."""
    id: PostId
    caption: str
    image: str
    user_id: UserId
    created_at: datetime
    updated_at: datetime
    likes: list[UserId] = field(default_factory=list)
    comments: list[CommentRecord] = field(default_factory=list)


class PostRepository(Protocol):
    """Contract for post persistence — implemented by infrastructure."""
    async def find_all(self) -> list[PostRecord]: ...
    async def find_by_id(self, post_id: PostId) -> PostRecord | None: ...
    async def find_by_owner(self, owner_id: UserId) -> list[PostRecord]: ...
    async def find_trending(self, limit: int) -> list[PostRecord]: ...
    async def insert(
        self, caption: str, image: str, owner_id: UserId,
    ) -> PostRecord: ...
    async def update_fields(
        self, post_id: PostId, **fields: object,
    ) -> bool: ...
    async def delete(self, post_id: PostId) -> bool: ...
    async def toggle_like(
        self, post_id: PostId, user_id: UserId,
    ) -> LikeAction: ...
    async def append_comment(
        self, post_id: PostId, author: dict, text: str,
    ) -> None: ...


class UserRepository(Protocol):
    """Contract for reading externally owned user profiles."""
    async def get_profile(self, user_id: UserId) -> dict | None: ...
