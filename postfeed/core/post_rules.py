"""Post Rules — ownership checks and profile snapshots, pure functions only.

Invariants:
    - is_owner compares normalized ids on both sides (UUID vs str never mismatches)
    - ensure_owner raises PostForbiddenError, never returns a flag
    - public_snapshot never contains a secret field

Design Decisions:
    - SECRET_PROFILE_FIELDS is a deny list: any new public column on users
      shows up in comment snapshots without touching this module
"""

from postfeed.core.domain_types import PostAction, normalize_id
from postfeed.core.errors import ErrorContext, PostForbiddenError


SECRET_PROFILE_FIELDS: frozenset[str] = frozenset({
    "password", "password_hash", "hashed_password",
})


def is_owner(owner_id: object, caller_id: object) -> bool:
    """True when the stored owner and the caller identity are the same user."""
    owner = normalize_id(owner_id)
    return bool(owner) and owner == normalize_id(caller_id)


def ensure_owner(
    owner_id: object, caller_id: object, action: PostAction, post_id: object = None,
) -> None:
    """Raise PostForbiddenError unless caller owns the post."""
    if not is_owner(owner_id, caller_id):
        raise PostForbiddenError(
            action.value,
            ErrorContext(
                post_id=normalize_id(post_id) or None,
                user_id=normalize_id(caller_id) or None,
            ),
        )


def public_snapshot(profile: dict) -> dict:
    """Copy of a user profile without secret fields."""
    return {
        key: value for key, value in profile.items()
        if key not in SECRET_PROFILE_FIELDS
    }
