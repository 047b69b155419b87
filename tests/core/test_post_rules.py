"""Post Rules — ownership checks and public profile snapshots.

Invariants:
    - Ownership compares normalized ids (UUID object == its string form)
    - An empty owner never matches, not even an empty caller
    - Snapshots drop every secret field and keep the rest untouched
"""

from uuid import uuid4

import pytest

from postfeed.core.domain_types import PostAction
from postfeed.core.errors import PostForbiddenError
from postfeed.core.post_rules import ensure_owner, is_owner, public_snapshot


def test_is_owner_with_same_string():
    assert is_owner("user-1", "user-1")


def test_is_owner_across_uuid_and_string():
    uid = uuid4()
    assert is_owner(uid, str(uid))
    assert is_owner(str(uid), uid)


def test_is_owner_rejects_other_user():
    assert not is_owner("user-1", "user-2")


def test_is_owner_rejects_empty_ids():
    assert not is_owner("", "")
    assert not is_owner(None, None)


def test_ensure_owner_passes_for_owner():
    ensure_owner("user-1", "user-1", PostAction.DELETE)


def test_ensure_owner_raises_with_action_message():
    with pytest.raises(PostForbiddenError) as exc_info:
        ensure_owner("user-1", "user-2", PostAction.UPDATE, post_id="p-1")
    err = exc_info.value
    assert err.http_status == 403
    assert err.message == "You can't update other posts"
    assert err.context.post_id == "p-1"
    assert err.context.user_id == "user-2"


def test_public_snapshot_drops_secrets():
    profile = {
        "id": "user-1", "username": "alice", "email": "a@example.com",
        "password_hash": "x", "password": "y", "hashed_password": "z",
    }
    snapshot = public_snapshot(profile)
    assert snapshot == {"id": "user-1", "username": "alice", "email": "a@example.com"}


def test_public_snapshot_is_a_copy():
    profile = {"id": "user-1", "bio": "hi"}
    snapshot = public_snapshot(profile)
    profile["bio"] = "changed"
    assert snapshot["bio"] == "hi"
