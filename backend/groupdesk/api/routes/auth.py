"""Session Entry and Exit — email/password login and logout.

Invariants:
    - Login is rate limited on its own "login" scope, tighter than other writes
    - Both failed-login cases answer with the same 400 body
    - Logout needs no session; it always clears the cookie
"""

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from groupdesk.api.request_body import read_json_body, validate_body
from groupdesk.core.domain_types import GroupId, MemberId
from groupdesk.infrastructure.database import get_db
from groupdesk.infrastructure.session_cookie import (
    SessionPayload, apply_cookie, build_clear_session_cookie, build_session_cookie,
)
from groupdesk.infrastructure.write_security import check_write_request
from groupdesk.schemas.auth import LoginRequest
from groupdesk.schemas.status import SuccessResponse
from groupdesk.services.member_login import authenticate_member

router = APIRouter(prefix="/api", tags=["auth"])

MISSING_CREDENTIALS_MESSAGE = "Email and password are required."


@router.post("/login", response_model=SuccessResponse)
async def login(
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db),
):
    guard = check_write_request(request, rate_key="login", scope="login")
    if guard:
        return guard

    body = validate_body(
        LoginRequest, await read_json_body(request), MISSING_CREDENTIALS_MESSAGE,
    )
    member = await authenticate_member(db, body.email, body.password)

    apply_cookie(
        response,
        build_session_cookie(
            SessionPayload(
                member_id=MemberId(member.id), group_id=GroupId(member.group_id),
            ),
        ),
    )
    return SuccessResponse()


@router.post("/logout", response_model=SuccessResponse)
async def logout(request: Request, response: Response):
    guard = check_write_request(request, rate_key="logout")
    if guard:
        return guard
    apply_cookie(response, build_clear_session_cookie())
    return SuccessResponse()
