"""Error Envelope — every failure leaves the API as {"error": "<message>"}.

Invariants:
    - PostFeedError subclasses keep their status and message
    - Unhandled exceptions → 500 with a generic message by default
    - expose_internal_errors=True echoes the raw exception text
    - Unknown routes keep their status but use the same envelope
"""

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

import postfeed.api.error_handlers as handlers_module
from postfeed.api.error_handlers import (
    GENERIC_ERROR_MESSAGE, first_error_message, register_error_handlers,
)
from postfeed.config import Settings
from postfeed.core.errors import DatabaseError, PostForbiddenError


@pytest.fixture
def failing_app():
    app = FastAPI()
    register_error_handlers(app)

    @app.get("/boom")
    async def boom():
        raise RuntimeError("connection reset by peer")

    @app.get("/forbidden")
    async def forbidden():
        raise PostForbiddenError("delete")

    @app.get("/db")
    async def db_down():
        raise DatabaseError("OperationalError", "find_all")

    return app


@pytest.fixture
async def failing_client(failing_app):
    async with AsyncClient(
        transport=ASGITransport(app=failing_app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        yield c


async def test_domain_error_keeps_status_and_message(failing_client):
    res = await failing_client.get("/forbidden")
    assert res.status_code == 403
    assert res.json() == {"error": "You can't delete other posts"}


async def test_database_error_is_500(failing_client):
    res = await failing_client.get("/db")
    assert res.status_code == 500
    assert res.json() == {"error": "Database find_all failed: OperationalError"}


async def test_unhandled_error_hides_details_by_default(failing_client, monkeypatch):
    monkeypatch.setattr(handlers_module, "get_settings", lambda: Settings())
    res = await failing_client.get("/boom")
    assert res.status_code == 500
    assert res.json() == {"error": GENERIC_ERROR_MESSAGE}


async def test_unhandled_error_exposed_when_configured(failing_client, monkeypatch):
    monkeypatch.setattr(
        handlers_module, "get_settings",
        lambda: Settings(expose_internal_errors=True),
    )
    res = await failing_client.get("/boom")
    assert res.status_code == 500
    assert res.json() == {"error": "connection reset by peer"}


async def test_unknown_route_uses_envelope(client):
    res = await client.get("/nope")
    assert res.status_code == 404
    assert res.json() == {"error": "Not Found"}


def test_first_error_message_picks_first():
    errors = [
        {"type": "caption_required", "loc": ("body", "caption"), "msg": "Caption is required"},
        {"type": "image_required", "loc": ("body", "image"), "msg": "Image is required"},
    ]
    assert first_error_message(errors) == "Caption is required"


def test_first_error_message_for_missing_body():
    errors = [{"type": "missing", "loc": ("body",), "msg": "Field required"}]
    assert first_error_message(errors) == "Request body is required"


def test_first_error_message_without_errors():
    assert first_error_message([]) == "Invalid request data"
