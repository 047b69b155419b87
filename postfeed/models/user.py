"""User ORM — read-only view of the accounts table shared with the auth service.

Invariants:
    - PostFeed never writes users (accounts are created by the auth service)
    - password_hash is never serialized outside this module's repository

Design Decisions:
    - id is an opaque string: tokens carry it verbatim, posts reference it verbatim
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from postfeed.core.domain_types import USER_ID_MAX_LENGTH
from postfeed.db.base import Base


class User(Base):
    """Account owned by the auth service."""
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(
        String(USER_ID_MAX_LENGTH), primary_key=True, default=lambda: str(uuid.uuid4()),
    )
    username: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    avatar: Mapped[str | None] = mapped_column(Text, nullable=True)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
