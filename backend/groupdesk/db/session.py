"""Async Session Factory — engines and sessions for usage outside FastAPI.

Invariants:
    - Meant for scripts, migrations, and test fixtures
    - The caller owns the engine and must dispose it

Design Decisions:
    - Separate from infrastructure/database.py: maintenance scripts need a raw
      engine they can dispose deterministically, not the request-scoped manager
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine,
)


def create_script_engine(database_url: str) -> AsyncEngine:
    """Create a standalone async engine for one-off processes."""
    return create_async_engine(database_url, echo=False)


def create_session_factory(
    engine: AsyncEngine,
) -> async_sessionmaker[AsyncSession]:
    """Create an async session factory bound to the given engine."""
    return async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False,
    )
