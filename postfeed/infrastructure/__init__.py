"""Infrastructure Layer — database, storage, token verification and logging.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Driver/IO failures are mapped to PostFeedError subclasses before leaving this layer
"""
