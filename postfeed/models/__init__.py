"""ORM Models — SQLAlchemy declarative models for all persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Post is the aggregate root for likes and comments

Design Decisions:
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from postfeed.models.post import Post, PostComment, PostLike  # noqa: F401
from postfeed.models.user import User  # noqa: F401
