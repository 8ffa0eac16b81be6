"""Todo Status — PATCH /api/todos/{id}/status.

Tests cover:
    - Session, id and body validation in guard order
    - Tenant-scoped lookup (other group → 404, row unchanged)
    - Any status may follow any other, including DONE → TODO
    - /todo view invalidated after success only
"""

import pytest

from groupdesk.infrastructure.view_cache import view_registry
from groupdesk.models import TodoItem
from tests.services.factories import session_headers


async def _stored_status(factory, todo_id: int) -> str:
    async with factory() as db:
        return (await db.get(TodoItem, todo_id)).status


async def test_requires_session(client, seed, test_session_factory):
    group = await seed.group()
    creator = await seed.member(group)
    todo = await seed.todo(group, creator, status="TODO")

    res = await client.patch(f"/api/todos/{todo.id}/status", json={"status": "DONE"})
    assert res.status_code == 401
    assert await _stored_status(test_session_factory, todo.id) == "TODO"
    assert view_registry.drain() == set()


async def test_invalid_todo_id_returns_400(client, seed):
    group = await seed.group()
    member = await seed.member(group)

    res = await client.patch(
        "/api/todos/xyz/status", json={"status": "DONE"},
        headers=session_headers(member),
    )

    assert res.status_code == 400
    assert res.json()["error"]["message"] == "Invalid todo id"


@pytest.mark.parametrize("status", ["FINISHED", "done", "", None])
async def test_invalid_status_returns_400(client, seed, test_session_factory, status):
    group = await seed.group()
    member = await seed.member(group)
    todo = await seed.todo(group, member, status="TODO")

    res = await client.patch(
        f"/api/todos/{todo.id}/status", json={"status": status},
        headers=session_headers(member),
    )

    assert res.status_code == 400
    assert res.json()["error"]["message"] == "Status must be one of TODO, IN_PROGRESS, DONE."
    assert await _stored_status(test_session_factory, todo.id) == "TODO"


async def test_todo_in_other_group_returns_404(client, seed, test_session_factory):
    home = await seed.group()
    other = await seed.group()
    member = await seed.member(home)
    outsider = await seed.member(other)
    foreign = await seed.todo(other, outsider, status="TODO")

    res = await client.patch(
        f"/api/todos/{foreign.id}/status", json={"status": "DONE"},
        headers=session_headers(member),
    )

    assert res.status_code == 404
    assert await _stored_status(test_session_factory, foreign.id) == "TODO"


async def test_status_moves_forward_and_back(client, seed, test_session_factory):
    group = await seed.group()
    member = await seed.member(group)
    todo = await seed.todo(group, member)
    headers = session_headers(member)

    for status in ("IN_PROGRESS", "DONE", "TODO"):
        res = await client.patch(
            f"/api/todos/{todo.id}/status", json={"status": status}, headers=headers,
        )
        assert res.status_code == 200
        assert res.json()["todo"]["status"] == status
        assert await _stored_status(test_session_factory, todo.id) == status


async def test_response_carries_todo_fields(client, seed):
    group = await seed.group()
    member = await seed.member(group)
    todo = await seed.todo(group, member)

    res = await client.patch(
        f"/api/todos/{todo.id}/status", json={"status": "DONE"},
        headers=session_headers(member),
    )

    data = res.json()["todo"]
    assert data["id"] == todo.id
    assert data["groupId"] == group.id
    assert data["createdByMemberId"] == member.id
    assert data["title"] == todo.title


async def test_success_marks_todo_view_stale(client, seed):
    group = await seed.group()
    member = await seed.member(group)
    todo = await seed.todo(group, member)

    await client.patch(
        f"/api/todos/{todo.id}/status", json={"status": "DONE"},
        headers=session_headers(member),
    )

    assert view_registry.drain() == {"/todo"}
