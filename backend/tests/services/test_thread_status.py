"""Thread Status — PATCH /api/threads/{id}/status.

Tests cover:
    - 401 without a session, before id or body are looked at
    - 400 for invalid ids and statuses, with the stored status unchanged
    - 404 for a thread in another group, with the stored status unchanged
    - CLOSED → OPEN round trip and view invalidation after commit
"""

import pytest

from groupdesk.infrastructure.view_cache import view_registry
from groupdesk.models import ChatThread
from tests.services.factories import session_headers


async def _stored_status(factory, thread_id: int) -> str:
    async with factory() as db:
        return (await db.get(ChatThread, thread_id)).status


async def test_requires_session(client, seed, test_session_factory):
    group = await seed.group()
    thread = await seed.thread(group, status="OPEN")

    res = await client.patch(
        f"/api/threads/{thread.id}/status", json={"status": "CLOSED"},
    )

    assert res.status_code == 401
    assert res.json()["error"]["code"] == "UNAUTHORIZED"
    assert await _stored_status(test_session_factory, thread.id) == "OPEN"
    assert view_registry.drain() == set()


async def test_tampered_cookie_is_treated_as_no_session(client, seed, test_session_factory):
    group = await seed.group()
    thread = await seed.thread(group)

    res = await client.patch(
        f"/api/threads/{thread.id}/status", json={"status": "CLOSED"},
        headers={"Cookie": "pta_session=not-a-token"},
    )
    assert res.status_code == 401
    assert await _stored_status(test_session_factory, thread.id) == "OPEN"


async def test_unauthenticated_invalid_id_still_401(client):
    res = await client.patch("/api/threads/abc/status", json={"status": "BOGUS"})
    assert res.status_code == 401


@pytest.mark.parametrize("raw_id", ["abc", "0", "-3", "1.5", "12abc"])
async def test_invalid_thread_id_returns_400(client, seed, raw_id):
    group = await seed.group()
    member = await seed.member(group)

    res = await client.patch(
        f"/api/threads/{raw_id}/status", json={"status": "CLOSED"},
        headers=session_headers(member),
    )

    assert res.status_code == 400
    assert res.json()["error"]["message"] == "Invalid thread id"


@pytest.mark.parametrize("body", [{"status": "ARCHIVED"}, {"status": "closed"}, {}])
async def test_invalid_status_returns_400_and_keeps_row(
    client, seed, test_session_factory, body,
):
    group = await seed.group()
    member = await seed.member(group)
    thread = await seed.thread(group, status="OPEN")

    res = await client.patch(
        f"/api/threads/{thread.id}/status", json=body,
        headers=session_headers(member),
    )

    assert res.status_code == 400
    assert res.json()["error"]["message"] == "Status must be OPEN or CLOSED."
    assert await _stored_status(test_session_factory, thread.id) == "OPEN"


async def test_thread_in_other_group_returns_404(client, seed, test_session_factory):
    home = await seed.group()
    other = await seed.group()
    member = await seed.member(home)
    foreign = await seed.thread(other, status="OPEN")

    res = await client.patch(
        f"/api/threads/{foreign.id}/status", json={"status": "CLOSED"},
        headers=session_headers(member),
    )

    assert res.status_code == 404
    assert await _stored_status(test_session_factory, foreign.id) == "OPEN"
    assert view_registry.drain() == set()


async def test_other_group_and_missing_thread_look_the_same(client, seed):
    home = await seed.group()
    other = await seed.group()
    member = await seed.member(home)
    foreign = await seed.thread(other)

    foreign_res = await client.patch(
        f"/api/threads/{foreign.id}/status", json={"status": "CLOSED"},
        headers=session_headers(member),
    )
    missing_res = await client.patch(
        "/api/threads/999999/status", json={"status": "CLOSED"},
        headers=session_headers(member),
    )

    assert foreign_res.status_code == missing_res.status_code == 404
    assert foreign_res.json()["error"]["code"] == missing_res.json()["error"]["code"]


async def test_close_then_reopen(client, seed, test_session_factory):
    group = await seed.group()
    member = await seed.member(group)
    thread = await seed.thread(group, status="OPEN")
    headers = session_headers(member)

    closed = await client.patch(
        f"/api/threads/{thread.id}/status", json={"status": "CLOSED"}, headers=headers,
    )
    assert closed.status_code == 200
    assert closed.json()["success"] is True
    assert closed.json()["thread"]["status"] == "CLOSED"
    assert closed.json()["thread"]["groupId"] == group.id
    assert await _stored_status(test_session_factory, thread.id) == "CLOSED"

    reopened = await client.patch(
        f"/api/threads/{thread.id}/status", json={"status": "OPEN"}, headers=headers,
    )
    assert reopened.status_code == 200
    assert await _stored_status(test_session_factory, thread.id) == "OPEN"


async def test_success_marks_views_stale(client, seed):
    group = await seed.group()
    member = await seed.member(group)
    thread = await seed.thread(group)

    await client.patch(
        f"/api/threads/{thread.id}/status", json={"status": "CLOSED"},
        headers=session_headers(member),
    )

    assert view_registry.drain() == {"/chat", f"/threads/{thread.id}"}


async def test_invalid_status_leaves_views_fresh(client, seed):
    group = await seed.group()
    member = await seed.member(group)
    thread = await seed.thread(group)

    await client.patch(
        f"/api/threads/{thread.id}/status", json={"status": "NOPE"},
        headers=session_headers(member),
    )

    assert view_registry.drain() == set()
