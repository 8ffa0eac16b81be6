"""Status Schemas — thread and todo status updates and their responses.

Invariants:
    - status must match an enum value exactly (case-sensitive)
    - Response rows are rendered from ORM objects (from_attributes)
"""

from datetime import datetime

from groupdesk.core.domain_types import ThreadStatus, TodoStatus
from groupdesk.schemas.base import CamelModel


class ThreadStatusUpdate(CamelModel):
    status: ThreadStatus


class TodoStatusUpdate(CamelModel):
    status: TodoStatus


class ThreadOut(CamelModel):
    id: int
    group_id: int
    title: str
    status: ThreadStatus
    created_at: datetime
    updated_at: datetime


class TodoOut(CamelModel):
    id: int
    group_id: int
    created_by_member_id: int
    assigned_member_id: int | None = None
    source_thread_id: int | None = None
    title: str
    body: str | None = None
    status: TodoStatus
    due_date: datetime | None = None
    created_at: datetime
    updated_at: datetime


class ThreadStatusResponse(CamelModel):
    success: bool = True
    thread: ThreadOut


class TodoStatusResponse(CamelModel):
    success: bool = True
    todo: TodoOut


class SuccessResponse(CamelModel):
    success: bool = True
