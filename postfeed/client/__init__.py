"""Client Layer — async Python client for the /posts API.

Invariants:
    - Client never imports server modules (talks HTTP only)
"""

from postfeed.client.posts_client import FeedState, PostsAPIError, PostsClient

__all__ = ["FeedState", "PostsAPIError", "PostsClient"]
