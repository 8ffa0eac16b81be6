"""Session Cookie — signed (member_id, group_id) token carried in an HttpOnly cookie.

Invariants:
    - decode_session never raises: missing, malformed, tampered or expired → None
    - Payload ids must both be integers, otherwise the session is absent
    - Cookie is HttpOnly, SameSite=lax, path "/", Secure only in production

Design Decisions:
    - HS256 JWT (PyJWT) as the signed envelope: expiry and signature checks come
      with the library instead of a hand-rolled HMAC format
    - resolve_session takes the Request explicitly; handlers never read cookies
      from ambient state
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt
from fastapi import Request, Response

from groupdesk.config import Settings, get_settings
from groupdesk.core.domain_types import GroupId, MemberId

logger = logging.getLogger(__name__)

_ALGORITHM = "HS256"


@dataclass(frozen=True)
class SessionPayload:
    """Authenticated caller identity."""
    member_id: MemberId
    group_id: GroupId


@dataclass(frozen=True)
class CookieSpec:
    """Attributes for a Set-Cookie header."""
    name: str
    value: str
    max_age: int
    httponly: bool = True
    samesite: str = "lax"
    secure: bool = False
    path: str = "/"


def encode_session(
    payload: SessionPayload, secret: str, max_age_seconds: int,
    now: datetime | None = None,
) -> str:
    issued = now or datetime.now(timezone.utc)
    claims = {
        "memberId": payload.member_id,
        "groupId": payload.group_id,
        "iat": issued,
        "exp": issued + timedelta(seconds=max_age_seconds),
    }
    return jwt.encode(claims, secret, algorithm=_ALGORITHM)


def decode_session(value: str | None, secret: str) -> SessionPayload | None:
    """Decode a session token. Absence is a normal outcome, never an exception."""
    if not value:
        return None
    try:
        claims = jwt.decode(value, secret, algorithms=[_ALGORITHM])
    except jwt.PyJWTError as e:
        logger.debug(f"Rejected session cookie: {e}")
        return None
    member_id = claims.get("memberId")
    group_id = claims.get("groupId")
    if not _is_id(member_id) or not _is_id(group_id):
        return None
    return SessionPayload(
        member_id=MemberId(member_id), group_id=GroupId(group_id),
    )


def _is_id(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def resolve_session(
    request: Request, settings: Settings | None = None,
) -> SessionPayload | None:
    settings = settings or get_settings()
    return decode_session(
        request.cookies.get(settings.session_cookie_name),
        settings.session_secret,
    )


def build_session_cookie(
    payload: SessionPayload, settings: Settings | None = None,
) -> CookieSpec:
    settings = settings or get_settings()
    max_age = settings.session_max_age_days * 24 * 60 * 60
    return CookieSpec(
        name=settings.session_cookie_name,
        value=encode_session(payload, settings.session_secret, max_age),
        max_age=max_age,
        secure=settings.is_production,
    )


def build_clear_session_cookie(settings: Settings | None = None) -> CookieSpec:
    settings = settings or get_settings()
    return CookieSpec(
        name=settings.session_cookie_name, value="", max_age=0,
        secure=settings.is_production,
    )


def apply_cookie(response: Response, cookie: CookieSpec) -> None:
    response.set_cookie(
        key=cookie.name,
        value=cookie.value,
        max_age=cookie.max_age,
        httponly=cookie.httponly,
        samesite=cookie.samesite,
        secure=cookie.secure,
        path=cookie.path,
    )
