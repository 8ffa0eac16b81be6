"""Root conftest — shared test configuration."""

import os

import pytest

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("SESSION_SECRET", "test-session-secret")
os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("PASSWORD_HASH_ROUNDS", "4")

from groupdesk.infrastructure.rate_limit import rate_limiter  # noqa: E402
from groupdesk.infrastructure.view_cache import view_registry  # noqa: E402


@pytest.fixture(autouse=True)
def _reset_process_state():
    """Rate-limit counters and stale views are per-process; isolate each test."""
    rate_limiter.reset()
    view_registry.drain()
    yield
    rate_limiter.reset()
    view_registry.drain()
