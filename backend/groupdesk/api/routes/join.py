"""Join — invite-code redemption that creates a member and starts a session.

Invariants:
    - The invite code is the only credential; no session is required
    - Missing code or displayName → 400 before any database access
    - email and password are optional but must arrive together
    - Success sets the session cookie for (member_id, group_id)
"""

import logging

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from groupdesk.api.request_body import read_json_body, validate_body
from groupdesk.core.domain_types import GroupId, MemberId
from groupdesk.core.errors import RequestBodyError
from groupdesk.infrastructure.database import get_db
from groupdesk.infrastructure.session_cookie import (
    SessionPayload, apply_cookie, build_session_cookie,
)
from groupdesk.infrastructure.write_security import check_write_request
from groupdesk.schemas.join import JoinRequest, JoinResponse
from groupdesk.services.join_group import redeem_invite

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/join", tags=["join"])

MISSING_FIELDS_MESSAGE = "Invite code and display name are required."
UNPAIRED_CREDENTIALS_MESSAGE = "Email and password must be provided together."


@router.post("", response_model=JoinResponse)
async def join_group(
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db),
):
    """Redeem an invite code and sign the new member in."""
    guard = check_write_request(request, rate_key="join")
    if guard:
        return guard

    body = validate_body(
        JoinRequest, await read_json_body(request), MISSING_FIELDS_MESSAGE,
    )
    if (body.email is None) != (body.password is None):
        raise RequestBodyError(UNPAIRED_CREDENTIALS_MESSAGE)

    member = await redeem_invite(
        db, body.code, body.display_name,
        email=body.email, password=body.password,
    )

    apply_cookie(
        response,
        build_session_cookie(
            SessionPayload(
                member_id=MemberId(member.id), group_id=GroupId(member.group_id),
            ),
        ),
    )
    return JoinResponse(member_id=member.id, group_id=member.group_id)
