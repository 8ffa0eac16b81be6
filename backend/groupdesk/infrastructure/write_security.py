"""Write-Security Guard — same-origin and rate-limit checks before any mutation.

Invariants:
    - Runs before session-dependent logic, even when no session was resolved
    - Returns a ready response to short-circuit, or None to continue
    - Origin is checked first; Referer only when Origin is absent;
      requests carrying neither pass (older clients omit both)
    - Rate-limit key prefers the member id; anonymous callers are keyed by IP
    - The "login" scope has its own, tighter limit; every other scope uses the write limit

Design Decisions:
    - Function returning an optional response instead of raising: routes keep the
      "if guard: return guard" shape and the guard stays a pure request check
    - Error bodies reuse GroupDeskError.to_response() so clients see one envelope
"""

import logging
import re
from urllib.parse import urlsplit

from fastapi import Request
from fastapi.responses import JSONResponse

from groupdesk.config import Settings, get_settings
from groupdesk.core.errors import (
    CsrfRejectedError, GroupDeskError, RateLimitedError,
)
from groupdesk.infrastructure.rate_limit import RateLimiter, rate_limiter

logger = logging.getLogger(__name__)

_DEV_ORIGIN = "http://localhost:3000"
_FORWARDED_FOR = re.compile(r'for=(?:"?\[?)([^;"]+)', re.IGNORECASE)
_IP_HEADERS = ("x-forwarded-for", "x-real-ip", "cf-connecting-ip", "x-client-ip")


def normalize_origin(value: str | None) -> str | None:
    """Reduce a URL to scheme://host[:port], or None when it is not absolute."""
    if not value:
        return None
    try:
        parts = urlsplit(value.strip())
        port = parts.port
    except ValueError:
        return None
    if parts.scheme not in ("http", "https") or not parts.hostname:
        return None
    origin = f"{parts.scheme}://{parts.hostname.lower()}"
    default_port = 443 if parts.scheme == "https" else 80
    if port and port != default_port:
        origin += f":{port}"
    return origin


def resolve_allowed_origins(settings: Settings) -> list[str]:
    origins: list[str] = []
    for raw in (settings.app_origin, settings.public_app_url):
        if not raw:
            continue
        for item in raw.split(","):
            origin = normalize_origin(item)
            if origin and origin not in origins:
                origins.append(origin)
    if not origins and not settings.is_production:
        origins.append(_DEV_ORIGIN)
    return origins


def check_same_origin(request: Request, settings: Settings) -> str | None:
    """Return a rejection reason, or None when the request may proceed."""
    allowed = resolve_allowed_origins(settings)
    origin_header = request.headers.get("origin")
    if origin_header:
        if normalize_origin(origin_header) in allowed:
            return None
        return f"Origin '{origin_header}' is not allowed"

    referer = request.headers.get("referer")
    if referer:
        if normalize_origin(referer) in allowed:
            return None
        return f"Referer '{referer}' is not allowed"

    return None


def get_client_ip(request: Request) -> str:
    for header in _IP_HEADERS:
        candidate = request.headers.get(header)
        if candidate:
            ip = candidate.split(",")[0].strip()
            if ip:
                return ip

    forwarded = request.headers.get("forwarded")
    if forwarded:
        match = _FORWARDED_FOR.search(forwarded)
        if match:
            ip = re.sub(r'["\]\s]', "", match.group(1))
            if ip:
                return ip

    if request.client and request.client.host:
        return request.client.host
    return "unknown"


def rate_limit_for(scope: str, settings: Settings) -> int:
    if scope == "login":
        return settings.rate_limit_login_limit
    return settings.rate_limit_write_limit


def build_rate_limit_key(
    request: Request, scope: str,
    member_id: int | None = None, action: str | None = None,
) -> str:
    if member_id is not None:
        identifier = f"member:{member_id}"
    else:
        identifier = f"ip:{get_client_ip(request)}"
    return f"{action or scope}:{identifier}"


def check_write_request(
    request: Request,
    *,
    member_id: int | None = None,
    rate_key: str | None = None,
    scope: str = "write",
    settings: Settings | None = None,
    limiter: RateLimiter | None = None,
) -> JSONResponse | None:
    """Guard a mutating request. A returned response is final."""
    settings = settings or get_settings()
    limiter = limiter or rate_limiter

    reason = check_same_origin(request, settings)
    if reason:
        logger.warning(
            f"Write request rejected: {reason}",
            extra={"path": request.url.path, "member_id": member_id},
        )
        return _error_response(CsrfRejectedError(reason))

    key = build_rate_limit_key(request, scope, member_id, rate_key)
    result = limiter.hit(
        key,
        limit=rate_limit_for(scope, settings),
        window_seconds=settings.rate_limit_window_seconds,
    )
    if not result.ok:
        logger.warning(
            "Write request rate limited",
            extra={"path": request.url.path, "rate_key": key},
        )
        return _error_response(
            RateLimitedError(result.retry_after_seconds or 1),
            headers={"Retry-After": str(result.retry_after_seconds or 1)},
        )

    return None


def _error_response(
    exc: GroupDeskError, headers: dict[str, str] | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=exc.http_status, content=exc.to_response(), headers=headers,
    )
