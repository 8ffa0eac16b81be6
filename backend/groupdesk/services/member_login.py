"""Member Login — checks an email/password pair against stored bcrypt hashes.

Invariants:
    - Unknown email, a member without credentials and a wrong password all
      raise the same InvalidCredentialsError
    - Read-only: a login never writes to the database
"""

import asyncio
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from groupdesk.core.errors import InvalidCredentialsError
from groupdesk.infrastructure.passwords import verify_password
from groupdesk.models.member import Member

logger = logging.getLogger(__name__)


async def authenticate_member(db: AsyncSession, email: str, password: str) -> Member:
    result = await db.execute(select(Member).where(Member.email == email))
    member = result.scalar_one_or_none()

    stored_hash = member.password_hash if member is not None else None
    if not await asyncio.to_thread(verify_password, password, stored_hash):
        logger.info("Login refused", extra={"error_code": "INVALID_CREDENTIALS"})
        raise InvalidCredentialsError()

    logger.info(
        "Member signed in",
        extra={"member_id": member.id, "group_id": member.group_id},
    )
    return member
