"""Todo Status — PATCH /api/todos/{todo_id}/status.

Invariants:
    - Same gate order as thread status: guard → 401 → 400 id → 400 body → 404
    - Any of TODO / IN_PROGRESS / DONE may be set at any time
"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from groupdesk.api.dependencies import get_optional_session, require_session
from groupdesk.api.request_body import read_json_body, validate_body
from groupdesk.core.domain_types import TodoId
from groupdesk.core.identifiers import parse_positive_id
from groupdesk.infrastructure.database import get_db
from groupdesk.infrastructure.session_cookie import SessionPayload
from groupdesk.infrastructure.view_cache import ViewInvalidator, get_view_invalidator
from groupdesk.infrastructure.write_security import check_write_request
from groupdesk.schemas.status import TodoOut, TodoStatusResponse, TodoStatusUpdate
from groupdesk.services.status_updates import update_todo_status

router = APIRouter(prefix="/api/todos", tags=["todos"])

INVALID_STATUS_MESSAGE = "Status must be one of TODO, IN_PROGRESS, DONE."


@router.patch("/{todo_id}/status", response_model=TodoStatusResponse)
async def patch_todo_status(
    todo_id: str,
    request: Request,
    db: AsyncSession = Depends(get_db),
    session: SessionPayload | None = Depends(get_optional_session),
    views: ViewInvalidator = Depends(get_view_invalidator),
):
    guard = check_write_request(
        request, member_id=session.member_id if session else None,
    )
    if guard:
        return guard
    session = require_session(session)

    parsed_id = TodoId(parse_positive_id(todo_id, "todo"))
    body = validate_body(
        TodoStatusUpdate, await read_json_body(request), INVALID_STATUS_MESSAGE,
    )
    todo = await update_todo_status(db, parsed_id, session.group_id, body.status)

    views.invalidate("/todo")
    return TodoStatusResponse(todo=TodoOut.model_validate(todo))
