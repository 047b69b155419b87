"""Posts Client — one coroutine per /posts endpoint, results kept in a FeedState.

Invariants:
    - Any {"error": ...} body or non-2xx status raises PostsAPIError(status, message)
    - Feed-returning calls (create, like, update, delete, comment, list) replace FeedState.posts
    - trending / user posts / single post land in their own FeedState slots
    - A client built around a caller-supplied httpx.AsyncClient never closes it

Design Decisions:
    - httpx.AsyncClient: same library the test-suite drives the ASGI app with,
      so tests pass ASGITransport-backed clients straight in
"""

import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

logger = logging.getLogger(__name__)

POSTS_PREFIX = "/posts"


@dataclass
class FeedState:
    """Latest data received from the API."""
    posts: list[dict] = field(default_factory=list)
    trending: list[dict] = field(default_factory=list)
    user_posts: list[dict] = field(default_factory=list)
    current_post: dict | None = None


class PostsAPIError(Exception):
    """The API answered with an error envelope."""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class PostsClient:
    """Async client for the PostFeed API."""

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        token: str | None = None,
        http: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
    ):
        self._owns_http = http is None
        self._http = http or httpx.AsyncClient(base_url=base_url, timeout=timeout)
        self.token = token
        self.state = FeedState()

    async def __aenter__(self) -> "PostsClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    def _headers(self) -> dict[str, str]:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        response = await self._http.request(
            method, f"{POSTS_PREFIX}{path}", headers=self._headers(), **kwargs,
        )
        try:
            data = response.json() if response.content else None
        except ValueError:
            data = None

        if response.is_error or (isinstance(data, dict) and "error" in data):
            message = (
                str(data["error"]) if isinstance(data, dict) and "error" in data
                else response.text or response.reason_phrase
            )
            logger.warning(
                f"{method} {path} failed with {response.status_code}: {message}",
            )
            raise PostsAPIError(response.status_code, message)
        return data

    async def _feed(self, method: str, path: str, **kwargs: Any) -> list[dict]:
        posts = await self._request(method, path, **kwargs)
        self.state.posts = posts
        return posts

    # ─── Feed ─────────────────────────────────────────────────

    async def get_posts(self) -> list[dict]:
        return await self._feed("GET", "/")

    async def create_post(self, caption: str, image: str) -> list[dict]:
        return await self._feed("POST", "/", json={"caption": caption, "image": image})

    async def like_post(self, post_id: str) -> list[dict]:
        return await self._feed("PUT", f"/like/{post_id}")

    async def update_post(self, post_id: str, caption: str, image: str) -> list[dict]:
        return await self._feed(
            "PUT", f"/{post_id}", json={"caption": caption, "image": image},
        )

    async def delete_post(self, post_id: str) -> list[dict]:
        return await self._feed("DELETE", f"/{post_id}")

    async def comment_post(self, post_id: str, comment: str) -> list[dict]:
        return await self._feed("POST", f"/{post_id}/comment", json={"comment": comment})

    # ─── Other views ──────────────────────────────────────────

    async def get_trending(self) -> list[dict]:
        self.state.trending = await self._request("GET", "/trending")
        return self.state.trending

    async def get_my_posts(self) -> list[dict]:
        self.state.user_posts = await self._request("GET", "/userposts")
        return self.state.user_posts

    async def get_user_posts(self, user_id: str) -> list[dict]:
        self.state.user_posts = await self._request("GET", f"/userposts/{user_id}")
        return self.state.user_posts

    async def get_post(self, post_id: str) -> dict | None:
        self.state.current_post = await self._request("GET", f"/{post_id}")
        return self.state.current_post

    async def upload_image(
        self, filename: str, content: bytes, content_type: str = "image/jpeg",
    ) -> str:
        return await self._request(
            "POST", "/imageboi",
            files={"image": (filename, content, content_type)},
        )
