"""API test fixtures — FastAPI test client over the in-memory database.

Invariants:
    - get_db overridden to use the test session factory
    - get_settings overridden: uploads go to tmp_path, upload limit is small
    - Lifespan is not run (ASGITransport sends no lifespan events)
"""

import pytest
from httpx import ASGITransport, AsyncClient

from postfeed.config import Settings, get_settings
from postfeed.infrastructure.database import get_db
from postfeed.main import app

UPLOAD_LIMIT_BYTES = 2048


@pytest.fixture
def test_settings(tmp_path):
    return Settings(
        upload_dir=str(tmp_path / "images"),
        upload_max_bytes=UPLOAD_LIMIT_BYTES,
        trending_limit=5,
    )


@pytest.fixture
async def client(test_session_factory, test_settings):
    """FastAPI test client with DB and settings dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: test_settings

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(token_for):
    """Factory: user id → Authorization header dict."""
    def _headers(user_id: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token_for(user_id)}"}
    return _headers


@pytest.fixture
def create_post(client, auth_headers):
    """Factory: publish a post through the API, return the new post's JSON."""
    async def _create(
        user_id: str = "user-alice",
        caption: str = "Sunset over the bay",
        image: str = "https://img.example.com/sunset.jpg",
    ) -> dict:
        res = await client.post(
            "/posts/", json={"caption": caption, "image": image},
            headers=auth_headers(user_id),
        )
        assert res.status_code == 200, res.text
        return res.json()[0]
    return _create
