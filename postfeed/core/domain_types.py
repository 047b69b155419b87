"""Domain Types — identity types and bounds shared across the codebase.

Invariants:
    - PostId wraps UUID; UserId wraps the canonical string form of an opaque user id
    - normalize_id is the ONLY way identifiers are compared (str on both sides)
    - CAPTION_MIN_LENGTH / CAPTION_MAX_LENGTH are inclusive bounds
    - USER_ID_MAX_LENGTH matches the width of every user_id column

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - User ids stay opaque strings: users are owned by another service
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

PostId = NewType("PostId", UUID)
UserId = NewType("UserId", str)


# ─── Bounds ──────────────────────────────────────────────────────

CAPTION_MIN_LENGTH: int = 5
CAPTION_MAX_LENGTH: int = 100
USER_ID_MAX_LENGTH: int = 64


# ─── Enums ───────────────────────────────────────────────────────

class LikeAction(str, Enum):
    """Outcome of a like toggle."""
    LIKED = "liked"
    UNLIKED = "unliked"


class PostAction(str, Enum):
    """Owner-only mutations — value is the verb used in 403 messages."""
    DELETE = "delete"
    UPDATE = "update"


# ─── Normalization ───────────────────────────────────────────────

def normalize_id(value: object) -> str:
    """Canonical comparable form of an identifier (UUID, str, int...)."""
    if value is None:
        return ""
    return str(value).strip()


def parse_post_id(raw: str) -> PostId | None:
    """Parse a path segment into a PostId. Returns None if it is not a UUID."""
    try:
        return PostId(UUID(str(raw)))
    except (ValueError, AttributeError, TypeError):
        return None


def user_id(value: object) -> UserId:
    return UserId(normalize_id(value))
