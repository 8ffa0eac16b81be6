"""Logout, health probes and the global error envelope.

Tests cover:
    - POST /api/logout clears the session cookie and honours the write guard
    - Liveness always 200; readiness 503 without a database, 200 with one
    - DatabaseSessionManager maps SQLAlchemy failures to DatabaseError
    - Write routes answer 429 with Retry-After once the window is spent
"""

import pytest
from sqlalchemy import text

from groupdesk.config import get_settings
from groupdesk.core.errors import DatabaseError, UnauthorizedError
from groupdesk.infrastructure import database
from groupdesk.infrastructure.database import DatabaseSessionManager


async def test_logout_clears_cookie(client):
    res = await client.post("/api/logout")

    assert res.status_code == 200
    assert res.json() == {"success": True}
    set_cookie = res.headers["set-cookie"]
    assert set_cookie.startswith(f"{get_settings().session_cookie_name}=")
    assert "Max-Age=0" in set_cookie


async def test_logout_rejects_foreign_origin(client):
    res = await client.post("/api/logout", headers={"Origin": "https://evil.example"})
    assert res.status_code == 403
    assert "set-cookie" not in res.headers


async def test_liveness(client):
    res = await client.get("/api/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_readiness_without_database(client, monkeypatch):
    monkeypatch.setattr(database, "db_manager", None)
    res = await client.get("/api/health/ready")
    assert res.status_code == 503
    assert res.json()["reason"] == "database_unavailable"


async def test_readiness_with_database(client, monkeypatch):
    manager = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    monkeypatch.setattr(database, "db_manager", manager)
    try:
        res = await client.get("/api/health/ready")
    finally:
        await manager.dispose()
    assert res.status_code == 200
    assert res.json()["checks"]["database"] == "healthy"


async def test_session_manager_maps_sqlalchemy_errors():
    manager = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    try:
        with pytest.raises(DatabaseError) as exc:
            async with manager.session() as db:
                await db.execute(text("SELECT * FROM missing_table"))
    finally:
        await manager.dispose()
    assert exc.value.http_status == 503


async def test_session_manager_passes_domain_errors_through():
    manager = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    try:
        with pytest.raises(UnauthorizedError):
            async with manager.session():
                raise UnauthorizedError()
    finally:
        await manager.dispose()


async def test_write_routes_are_rate_limited_per_client(client):
    limit = get_settings().rate_limit_write_limit
    for _ in range(limit):
        assert (await client.post("/api/logout")).status_code == 200

    res = await client.post("/api/logout")

    assert res.status_code == 429
    assert res.json()["error"]["code"] == "RATE_LIMITED"
    assert int(res.headers["retry-after"]) >= 1
