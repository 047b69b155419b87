"""Post Feed Service — every post operation, expressed against repository protocols.

Invariants:
    - Mutations return the full feed (newest first) after the change is committed
    - A path id that is not a UUID is treated exactly like an unknown post
    - Owner-only mutations call ensure_owner BEFORE touching the store
    - Comment author is public_snapshot(profile) taken at comment time
    - Missing post on like/delete/update/comment → ResourceNotFoundError (404)

Design Decisions:
    - Service holds no state beyond its repositories: one instance per request
    - get() returns None for a missing post (GET /posts/{id} answers null, not 404)
"""

import logging

from postfeed.core.domain_types import (
    PostAction, PostId, UserId, normalize_id, parse_post_id,
)
from postfeed.core.errors import ErrorContext, ResourceNotFoundError
from postfeed.core.post_rules import ensure_owner, public_snapshot
from postfeed.core.repository_protocols import (
    PostRecord, PostRepository, UserRepository,
)

logger = logging.getLogger(__name__)

DEFAULT_TRENDING_LIMIT: int = 5


class PostFeedService:
    """Post CRUD, likes, comments and trending."""

    def __init__(
        self,
        posts: PostRepository,
        users: UserRepository,
        trending_limit: int = DEFAULT_TRENDING_LIMIT,
    ):
        self.posts = posts
        self.users = users
        self.trending_limit = trending_limit

    # ─── Reads ────────────────────────────────────────────────

    async def list_all(self) -> list[PostRecord]:
        return await self.posts.find_all()

    async def list_by_owner(self, owner_id: object) -> list[PostRecord]:
        return await self.posts.find_by_owner(UserId(normalize_id(owner_id)))

    async def trending(self) -> list[PostRecord]:
        return await self.posts.find_trending(self.trending_limit)

    async def get(self, raw_post_id: str) -> PostRecord | None:
        post_id = parse_post_id(raw_post_id)
        if post_id is None:
            return None
        return await self.posts.find_by_id(post_id)

    # ─── Mutations ────────────────────────────────────────────

    async def create(
        self, caption: str, image: str, caller: UserId,
    ) -> list[PostRecord]:
        record = await self.posts.insert(caption, image, caller)
        logger.info(
            "Post created", extra={"post_id": str(record.id), "user_id": caller},
        )
        return await self.posts.find_all()

    async def toggle_like(self, raw_post_id: str, caller: UserId) -> list[PostRecord]:
        post = await self._require_post(raw_post_id, caller)
        action = await self.posts.toggle_like(post.id, caller)
        logger.info(
            f"Post {action.value}",
            extra={"post_id": str(post.id), "user_id": caller, "action": action.value},
        )
        return await self.posts.find_all()

    async def delete(self, raw_post_id: str, caller: UserId) -> list[PostRecord]:
        post = await self._require_post(raw_post_id, caller)
        ensure_owner(post.user_id, caller, PostAction.DELETE, post.id)
        if not await self.posts.delete(post.id):
            raise ResourceNotFoundError(
                "Post", str(post.id), ErrorContext(post_id=str(post.id), user_id=caller),
            )
        logger.info(
            "Post deleted", extra={"post_id": str(post.id), "user_id": caller},
        )
        return await self.posts.find_all()

    async def update(
        self, raw_post_id: str, caption: str, image: str, caller: UserId,
    ) -> list[PostRecord]:
        post = await self._require_post(raw_post_id, caller)
        ensure_owner(post.user_id, caller, PostAction.UPDATE, post.id)
        if not await self.posts.update_fields(post.id, caption=caption, image=image):
            raise ResourceNotFoundError(
                "Post", str(post.id), ErrorContext(post_id=str(post.id), user_id=caller),
            )
        logger.info(
            "Post updated", extra={"post_id": str(post.id), "user_id": caller},
        )
        return await self.posts.find_all()

    async def comment(
        self, raw_post_id: str, text: str, caller: UserId,
    ) -> list[PostRecord]:
        post = await self._require_post(raw_post_id, caller)
        profile = await self.users.get_profile(caller)
        if profile is None:
            raise ResourceNotFoundError(
                "User", caller, ErrorContext(post_id=str(post.id), user_id=caller),
            )
        await self.posts.append_comment(post.id, public_snapshot(profile), text)
        logger.info(
            "Comment added", extra={"post_id": str(post.id), "user_id": caller},
        )
        return await self.posts.find_all()

    # ─── Helpers ──────────────────────────────────────────────

    async def _require_post(self, raw_post_id: str, caller: UserId) -> PostRecord:
        post_id: PostId | None = parse_post_id(raw_post_id)
        post = await self.posts.find_by_id(post_id) if post_id else None
        if post is None:
            raise ResourceNotFoundError(
                "Post", str(raw_post_id),
                ErrorContext(post_id=str(raw_post_id), user_id=caller),
            )
        return post
