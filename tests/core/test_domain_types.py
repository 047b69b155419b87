"""Domain Types — id normalization, post id parsing and caption bounds."""

from uuid import UUID, uuid4

from postfeed.core.domain_types import (
    CAPTION_MAX_LENGTH, CAPTION_MIN_LENGTH,
    LikeAction, PostAction, normalize_id, parse_post_id, user_id,
)


def test_caption_bounds():
    assert CAPTION_MIN_LENGTH == 5
    assert CAPTION_MAX_LENGTH == 100


def test_normalize_id_makes_uuid_and_string_equal():
    uid = uuid4()
    assert normalize_id(uid) == normalize_id(str(uid))


def test_normalize_id_strips_and_handles_none():
    assert normalize_id("  abc ") == "abc"
    assert normalize_id(None) == ""
    assert normalize_id(42) == "42"


def test_parse_post_id_accepts_uuid_strings():
    uid = uuid4()
    assert parse_post_id(str(uid)) == uid
    assert isinstance(parse_post_id(str(uid)), UUID)


def test_parse_post_id_rejects_garbage():
    assert parse_post_id("trending-ish") is None
    assert parse_post_id("") is None


def test_user_id_is_normalized_string():
    assert user_id(" user-1 ") == "user-1"


def test_post_action_values_are_verbs():
    assert PostAction.DELETE.value == "delete"
    assert PostAction.UPDATE.value == "update"


def test_like_action_members():
    assert set(LikeAction) == {LikeAction.LIKED, LikeAction.UNLIKED}
