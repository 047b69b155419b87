"""PostFeed Application Package — posts, likes, comments and trending feed.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
