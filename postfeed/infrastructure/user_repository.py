"""SQL User Repository — reads account profiles for comment author snapshots.

Invariants:
    - Read-only: no method writes to the users table
    - get_profile returns plain JSON-safe values (datetimes as ISO strings)
    - Missing user → None (caller decides whether that is a 404)
"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from postfeed.core.domain_types import UserId
from postfeed.core.errors import DatabaseError, ErrorContext
from postfeed.models.user import User

logger = logging.getLogger(__name__)


class SqlUserRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_profile(self, user_id: UserId) -> dict | None:
        """Full profile row as a dict, secret columns included."""
        try:
            user = await self.db.get(User, user_id)
        except SQLAlchemyError as e:
            logger.error(f"User lookup failed: {e}", extra={"user_id": user_id})
            raise DatabaseError(
                type(e).__name__, "get_profile", ErrorContext(user_id=user_id),
            )
        if user is None:
            return None
        return {
            "id": user.id,
            "username": user.username,
            "email": user.email,
            "name": user.name,
            "avatar": user.avatar,
            "bio": user.bio,
            "password_hash": user.password_hash,
            "created_at": user.created_at.isoformat() if user.created_at else None,
        }
