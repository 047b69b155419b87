"""Root conftest — shared test configuration and database fixtures.

Invariants:
    - Environment defaults set BEFORE any postfeed import (get_settings is cached)
    - Every test gets a fresh in-memory SQLite database with all tables created
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("LOG_FORMAT", "text")

from datetime import datetime, timedelta, timezone  # noqa: E402

import pytest  # noqa: E402
from jose import jwt  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker  # noqa: E402

import postfeed.models  # noqa: E402,F401
from postfeed.db.base import Base  # noqa: E402
from postfeed.infrastructure.database import build_engine  # noqa: E402
from postfeed.models.user import User  # noqa: E402

TEST_JWT_SECRET = os.environ["JWT_SECRET_KEY"]


def make_token(user_id: str, secret: str = TEST_JWT_SECRET, **claims) -> str:
    """Mint a bearer token the way the auth service does."""
    payload = {
        "id": user_id,
        "exp": datetime.now(timezone.utc) + timedelta(hours=1),
        **claims,
    }
    return jwt.encode(payload, secret, algorithm="HS256")


@pytest.fixture
async def test_engine():
    engine = build_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def users(test_db):
    """Two accounts: alice and bob."""
    alice = User(
        id="user-alice", username="alice", email="alice@example.com",
        name="Alice", bio="Shoots film", password_hash="$2b$12$alicehash",
    )
    bob = User(
        id="user-bob", username="bob", email="bob@example.com",
        name="Bob", password_hash="$2b$12$bobhash",
    )
    test_db.add_all([alice, bob])
    await test_db.commit()
    return {"alice": alice, "bob": bob}


@pytest.fixture
def token_for():
    """Factory: user id → signed bearer token."""
    return make_token
