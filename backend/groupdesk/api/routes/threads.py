"""Thread Status — PATCH /api/threads/{thread_id}/status.

Invariants:
    - Order: write guard → session (401) → id (400) → body (400) → lookup (404)
    - Lookup is scoped to the session's group; other groups' threads are 404
    - /chat and /threads/{id} views are invalidated only after the update commits
"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from groupdesk.api.dependencies import get_optional_session, require_session
from groupdesk.api.request_body import read_json_body, validate_body
from groupdesk.core.domain_types import ThreadId
from groupdesk.core.identifiers import parse_positive_id
from groupdesk.infrastructure.database import get_db
from groupdesk.infrastructure.session_cookie import SessionPayload
from groupdesk.infrastructure.view_cache import ViewInvalidator, get_view_invalidator
from groupdesk.infrastructure.write_security import check_write_request
from groupdesk.schemas.status import (
    ThreadOut, ThreadStatusResponse, ThreadStatusUpdate,
)
from groupdesk.services.status_updates import update_thread_status

router = APIRouter(prefix="/api/threads", tags=["threads"])

INVALID_STATUS_MESSAGE = "Status must be OPEN or CLOSED."


@router.patch("/{thread_id}/status", response_model=ThreadStatusResponse)
async def patch_thread_status(
    thread_id: str,
    request: Request,
    db: AsyncSession = Depends(get_db),
    session: SessionPayload | None = Depends(get_optional_session),
    views: ViewInvalidator = Depends(get_view_invalidator),
):
    """Open or close a chat thread in the caller's group."""
    guard = check_write_request(
        request, member_id=session.member_id if session else None,
    )
    if guard:
        return guard
    session = require_session(session)

    parsed_id = ThreadId(parse_positive_id(thread_id, "thread"))
    body = validate_body(
        ThreadStatusUpdate, await read_json_body(request), INVALID_STATUS_MESSAGE,
    )
    thread = await update_thread_status(
        db, parsed_id, session.group_id, body.status,
    )

    views.invalidate("/chat", f"/threads/{thread.id}")
    return ThreadStatusResponse(thread=ThreadOut.model_validate(thread))
