"""Services Layer — orchestrates repositories and core rules per operation.

Invariants:
    - Services depend on repository Protocols, never on SQLAlchemy directly
"""
