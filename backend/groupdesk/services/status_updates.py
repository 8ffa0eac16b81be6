"""Status Updates — tenant-scoped lookup and single-row status changes.

Invariants:
    - Lookups filter by id AND group_id in one query; a row in another group is
      indistinguishable from a missing row (both → ResourceNotFoundError)
    - Any enumerated status may replace any other (no forward-only ordering)
    - The stored status changes only after a successful lookup
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from groupdesk.core.domain_types import (
    GroupId, ThreadId, ThreadStatus, TodoId, TodoStatus,
)
from groupdesk.core.errors import ErrorContext, ResourceNotFoundError
from groupdesk.models.chat_thread import ChatThread
from groupdesk.models.todo_item import TodoItem

logger = logging.getLogger(__name__)


async def find_thread_in_group(
    db: AsyncSession, thread_id: ThreadId, group_id: GroupId,
) -> ChatThread:
    result = await db.execute(
        select(ChatThread).where(
            ChatThread.id == thread_id, ChatThread.group_id == group_id,
        ),
    )
    thread = result.scalar_one_or_none()
    if thread is None:
        raise ResourceNotFoundError(
            "Thread", thread_id, ErrorContext(group_id=group_id),
        )
    return thread


async def find_todo_in_group(
    db: AsyncSession, todo_id: TodoId, group_id: GroupId,
) -> TodoItem:
    result = await db.execute(
        select(TodoItem).where(
            TodoItem.id == todo_id, TodoItem.group_id == group_id,
        ),
    )
    todo = result.scalar_one_or_none()
    if todo is None:
        raise ResourceNotFoundError(
            "Todo", todo_id, ErrorContext(group_id=group_id),
        )
    return todo


async def update_thread_status(
    db: AsyncSession, thread_id: ThreadId, group_id: GroupId, status: ThreadStatus,
) -> ChatThread:
    thread = await find_thread_in_group(db, thread_id, group_id)
    thread.status = status.value
    await db.commit()
    await db.refresh(thread)
    logger.info(
        f"Thread {thread.id} status set to {thread.status}",
        extra={"group_id": group_id},
    )
    return thread


async def update_todo_status(
    db: AsyncSession, todo_id: TodoId, group_id: GroupId, status: TodoStatus,
) -> TodoItem:
    todo = await find_todo_in_group(db, todo_id, group_id)
    todo.status = status.value
    await db.commit()
    await db.refresh(todo)
    logger.info(
        f"Todo {todo.id} status set to {todo.status}",
        extra={"group_id": group_id},
    )
    return todo
