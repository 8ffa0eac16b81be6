"""Database Package — declarative Base and session factories for non-request contexts.

Invariants:
    - Single declarative Base for all ORM models
    - All sessions are async (AsyncSession)
"""
