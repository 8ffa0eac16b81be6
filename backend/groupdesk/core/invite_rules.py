"""Invite Rules — pure redemption checks for invite codes.

Invariants:
    - An invite is redeemable only if it exists, has no used_at, and is not expired
    - Expiry is evaluated at check time (never stored as a state)
    - Naive timestamps are treated as UTC (SQLite drops tzinfo on read)
"""

from datetime import datetime, timezone
from typing import Protocol


class InviteLike(Protocol):
    """Structural contract for invite rows passed to the rules."""
    expires_at: datetime | None
    used_at: datetime | None


def as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def is_invite_expired(invite: InviteLike, now: datetime) -> bool:
    if invite.expires_at is None:
        return False
    return as_utc(invite.expires_at) < as_utc(now)


def is_invite_redeemable(invite: InviteLike | None, now: datetime) -> bool:
    """True when the invite can still create a member."""
    if invite is None:
        return False
    if invite.used_at is not None:
        return False
    return not is_invite_expired(invite, now)


def normalize_invite_code(code: str) -> str:
    """Invite codes are case-insensitive; the canonical form is trimmed uppercase."""
    return code.strip().upper()
