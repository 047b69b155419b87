"""SQL Post Repository — SQLAlchemy implementation of PostRepository.

Invariants:
    - Every read uses populate_existing: rows changed by Core DELETE/UPDATE/INSERT
      in this session are never served stale from the identity map
    - Feed reads are ordered newest first (created_at desc, id desc as tiebreak)
    - toggle_like never reads before writing: DELETE the like row, INSERT only if
      nothing was deleted; a unique-constraint race resolves to LIKED
    - update_fields only touches caption/image (owner id is immutable)
    - SQLAlchemy failures surface as DatabaseError, never raw driver exceptions
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncIterator

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from postfeed.core.domain_types import LikeAction, PostId, UserId
from postfeed.core.errors import DatabaseError, ErrorContext
from postfeed.core.repository_protocols import CommentRecord, PostRecord
from postfeed.models.post import Post, PostComment, PostLike

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS: frozenset[str] = frozenset({"caption", "image"})


def to_record(post: Post) -> PostRecord:
    """Snapshot an ORM Post (with loaded likes/comments) into a PostRecord."""
    return PostRecord(
        id=PostId(post.id),
        caption=post.caption,
        image=post.image,
        user_id=UserId(post.user_id),
        created_at=post.created_at,
        updated_at=post.updated_at,
        likes=[UserId(like.user_id) for like in post.likes],
        comments=[
            CommentRecord(author=c.author, comment=c.text, created_at=c.created_at)
            for c in post.comments
        ],
    )


class SqlPostRepository:
    """Posts, likes and comments stored in relational tables."""

    def __init__(self, db: AsyncSession):
        self.db = db

    @asynccontextmanager
    async def _store_errors(
        self, operation: str, post_id: PostId | None = None,
    ) -> AsyncIterator[None]:
        try:
            yield
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(
                f"Post store {operation} failed: {e}",
                extra={"post_id": str(post_id) if post_id else None},
            )
            raise DatabaseError(
                type(e).__name__, operation,
                ErrorContext(post_id=str(post_id) if post_id else None),
            )

    async def _fetch(self, query) -> list[PostRecord]:
        result = await self.db.execute(
            query.execution_options(populate_existing=True),
        )
        return [to_record(p) for p in result.scalars().all()]

    async def find_all(self) -> list[PostRecord]:
        async with self._store_errors("find_all"):
            return await self._fetch(
                select(Post).order_by(Post.created_at.desc(), Post.id.desc()),
            )

    async def find_by_id(self, post_id: PostId) -> PostRecord | None:
        async with self._store_errors("find_by_id", post_id):
            records = await self._fetch(
                select(Post).where(Post.id == post_id),
            )
        return records[0] if records else None

    async def find_by_owner(self, owner_id: UserId) -> list[PostRecord]:
        async with self._store_errors("find_by_owner"):
            return await self._fetch(
                select(Post)
                .where(Post.user_id == owner_id)
                .order_by(Post.created_at.desc(), Post.id.desc()),
            )

    async def find_trending(self, limit: int) -> list[PostRecord]:
        """Top `limit` posts by number of likes; ties go to the newest post."""
        like_count = (
            select(func.count(PostLike.id))
            .where(PostLike.post_id == Post.id)
            .correlate(Post)
            .scalar_subquery()
        )
        async with self._store_errors("find_trending"):
            return await self._fetch(
                select(Post)
                .order_by(like_count.desc(), Post.created_at.desc())
                .limit(limit),
            )

    async def insert(
        self, caption: str, image: str, owner_id: UserId,
    ) -> PostRecord:
        now = datetime.now(timezone.utc)
        post = Post(
            caption=caption, image=image, user_id=owner_id,
            created_at=now, updated_at=now, likes=[], comments=[],
        )
        async with self._store_errors("insert"):
            self.db.add(post)
            await self.db.commit()
        return to_record(post)

    async def update_fields(self, post_id: PostId, **fields: object) -> bool:
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Fields not updatable: {', '.join(sorted(unknown))}")
        if not fields:
            return False
        async with self._store_errors("update", post_id):
            result = await self.db.execute(
                update(Post)
                .where(Post.id == post_id)
                .values(**fields, updated_at=datetime.now(timezone.utc)),
            )
            await self.db.commit()
        return result.rowcount > 0

    async def delete(self, post_id: PostId) -> bool:
        async with self._store_errors("delete", post_id):
            post = await self.db.get(Post, post_id, populate_existing=True)
            if post is None:
                return False
            await self.db.delete(post)
            await self.db.commit()
        return True

    async def toggle_like(self, post_id: PostId, user_id: UserId) -> LikeAction:
        async with self._store_errors("toggle_like", post_id):
            removed = await self.db.execute(
                delete(PostLike).where(
                    PostLike.post_id == post_id, PostLike.user_id == user_id,
                ),
            )
            if removed.rowcount:
                await self.db.commit()
                return LikeAction.UNLIKED
            try:
                await self.db.execute(
                    insert(PostLike).values(
                        post_id=post_id, user_id=user_id,
                        created_at=datetime.now(timezone.utc),
                    ),
                )
                await self.db.commit()
            except IntegrityError:
                # A concurrent toggle by the same user inserted first
                await self.db.rollback()
                logger.info(
                    "Duplicate like insert resolved as liked",
                    extra={"post_id": str(post_id), "user_id": user_id},
                )
        return LikeAction.LIKED

    async def append_comment(
        self, post_id: PostId, author: dict, text: str,
    ) -> None:
        async with self._store_errors("append_comment", post_id):
            self.db.add(PostComment(
                post_id=post_id, author=author, text=text,
                created_at=datetime.now(timezone.utc),
            ))
            await self.db.commit()
