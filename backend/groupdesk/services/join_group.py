"""Join Group — redeems an invite code into a new Member as one atomic unit.

Invariants:
    - Member creation and invite consumption commit together or not at all
    - An invite is consumed at most once: the consuming UPDATE is conditional on
      used_at IS NULL, so a concurrent winner leaves zero rows for the loser
    - The invite row is locked for the transaction where the backend supports it
      (SELECT ... FOR UPDATE on PostgreSQL; ignored by SQLite)
    - Unknown, expired and used codes produce the same InviteUnavailableError
    - An email already held by a member is refused before the invite is read,
      and the unique index catches a concurrent claim of the same address;
      either way the invite stays unused

Design Decisions:
    - Rules live in core/invite_rules.py; this module only orchestrates IO around them
    - The password is hashed before the invite lock is taken, so bcrypt time is
      never spent holding a row lock
"""

import asyncio
import logging
from datetime import datetime, timezone

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from groupdesk.core.domain_types import ROLE_MEMBER
from groupdesk.core.errors import EmailInUseError, InviteUnavailableError
from groupdesk.core.invite_rules import is_invite_redeemable
from groupdesk.infrastructure.passwords import hash_password
from groupdesk.models.invite_code import InviteCode
from groupdesk.models.member import Member

logger = logging.getLogger(__name__)


async def redeem_invite(
    db: AsyncSession,
    code: str,
    display_name: str,
    now: datetime | None = None,
    *,
    email: str | None = None,
    password: str | None = None,
) -> Member:
    """Create a member from an invite code.

    email and password are optional but travel together; when given, the member
    can later sign in with them. Raises InviteUnavailableError or EmailInUseError.
    """
    now = now or datetime.now(timezone.utc)

    password_hash = None
    if email is not None and password is not None:
        existing = await db.execute(select(Member.id).where(Member.email == email))
        if existing.scalar_one_or_none() is not None:
            await db.rollback()
            logger.info("Join refused: email in use", extra={"error_code": "EMAIL_IN_USE"})
            raise EmailInUseError()
        password_hash = await asyncio.to_thread(hash_password, password)
    else:
        email = None

    result = await db.execute(
        select(InviteCode).where(InviteCode.code == code).with_for_update(),
    )
    invite = result.scalar_one_or_none()
    if not is_invite_redeemable(invite, now):
        await db.rollback()
        logger.info("Invite redemption refused", extra={"error_code": "INVITE_UNAVAILABLE"})
        raise InviteUnavailableError()

    member = Member(
        group_id=invite.group_id,
        display_name=display_name,
        role=invite.role or ROLE_MEMBER,
        email=email,
        password_hash=password_hash,
    )
    db.add(member)
    try:
        await db.flush()
    except IntegrityError:
        await db.rollback()
        logger.info(
            "Join refused: email claimed concurrently",
            extra={"group_id": invite.group_id, "error_code": "EMAIL_IN_USE"},
        )
        raise EmailInUseError()

    consumed = await db.execute(
        update(InviteCode)
        .where(InviteCode.id == invite.id, InviteCode.used_at.is_(None))
        .values(used_at=now, used_by_member_id=member.id)
        .execution_options(synchronize_session=False),
    )
    if consumed.rowcount != 1:
        await db.rollback()
        logger.info(
            "Invite consumed concurrently; rolled back member",
            extra={"group_id": invite.group_id, "error_code": "INVITE_UNAVAILABLE"},
        )
        raise InviteUnavailableError()

    await db.commit()
    logger.info(
        "Member joined via invite",
        extra={"member_id": member.id, "group_id": member.group_id},
    )
    return member
