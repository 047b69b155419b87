"""Post Routes — the /posts REST surface.

Invariants:
    - Static paths (/userposts, /like, /trending) registered BEFORE /{post_id}
    - Auth is checked before the body is validated (401 wins over 400)
    - Mutations answer with the whole feed, newest first
    - Routes only translate HTTP <-> PostFeedService; no rules live here
"""

from fastapi import APIRouter, Depends

from postfeed.api.dependencies import get_caller, get_post_feed
from postfeed.core.domain_types import UserId
from postfeed.core.repository_protocols import PostRecord
from postfeed.schemas.post import CommentCreate, PostCreate, PostResponse, PostUpdate
from postfeed.services.post_feed import PostFeedService

router = APIRouter(prefix="/posts", tags=["posts"])


def _feed(records: list[PostRecord]) -> list[PostResponse]:
    return [PostResponse.from_record(r) for r in records]


@router.get("/", response_model=list[PostResponse])
async def list_posts(feed: PostFeedService = Depends(get_post_feed)):
    """All posts, newest first."""
    return _feed(await feed.list_all())


@router.post("/", response_model=list[PostResponse])
async def create_post(
    body: PostCreate,
    caller: UserId = Depends(get_caller),
    feed: PostFeedService = Depends(get_post_feed),
):
    """Publish a post as the caller."""
    return _feed(await feed.create(body.caption, body.image, caller))


@router.get("/userposts", response_model=list[PostResponse])
async def list_my_posts(
    caller: UserId = Depends(get_caller),
    feed: PostFeedService = Depends(get_post_feed),
):
    """Posts owned by the caller."""
    return _feed(await feed.list_by_owner(caller))


@router.get("/userposts/{user_id}", response_model=list[PostResponse])
async def list_user_posts(
    user_id: str, feed: PostFeedService = Depends(get_post_feed),
):
    """Posts owned by any user (public profile view)."""
    return _feed(await feed.list_by_owner(user_id))


@router.put("/like/{post_id}", response_model=list[PostResponse])
async def toggle_like(
    post_id: str,
    caller: UserId = Depends(get_caller),
    feed: PostFeedService = Depends(get_post_feed),
):
    """Like the post, or unlike it if the caller already did."""
    return _feed(await feed.toggle_like(post_id, caller))


@router.get("/trending", response_model=list[PostResponse])
async def trending_posts(feed: PostFeedService = Depends(get_post_feed)):
    """Most liked posts."""
    return _feed(await feed.trending())


@router.get("/{post_id}", response_model=PostResponse | None)
async def get_post(post_id: str, feed: PostFeedService = Depends(get_post_feed)):
    """Single post, or null when it does not exist."""
    record = await feed.get(post_id)
    return PostResponse.from_record(record) if record else None


@router.delete("/{post_id}", response_model=list[PostResponse])
async def delete_post(
    post_id: str,
    caller: UserId = Depends(get_caller),
    feed: PostFeedService = Depends(get_post_feed),
):
    """Delete one of the caller's posts."""
    return _feed(await feed.delete(post_id, caller))


@router.put("/{post_id}", response_model=list[PostResponse])
async def update_post(
    post_id: str,
    body: PostUpdate,
    caller: UserId = Depends(get_caller),
    feed: PostFeedService = Depends(get_post_feed),
):
    """Replace caption and image of one of the caller's posts."""
    return _feed(await feed.update(post_id, body.caption, body.image, caller))


@router.post("/{post_id}/comment", response_model=list[PostResponse])
async def comment_post(
    post_id: str,
    body: CommentCreate,
    caller: UserId = Depends(get_caller),
    feed: PostFeedService = Depends(get_post_feed),
):
    """Append a comment signed with the caller's current profile."""
    return _feed(await feed.comment(post_id, body.comment, caller))
