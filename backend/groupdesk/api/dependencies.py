"""Route Dependencies — request-scoped collaborators injected into handlers."""

from fastapi import Request

from groupdesk.core.errors import UnauthorizedError
from groupdesk.infrastructure.session_cookie import SessionPayload, resolve_session


async def get_optional_session(request: Request) -> SessionPayload | None:
    """Resolve the caller's session; None when absent or invalid."""
    return resolve_session(request)


def require_session(session: SessionPayload | None) -> SessionPayload:
    """Reject with 401 when no session was resolved.

    Called inside handlers (not as a dependency) so the write guard always
    runs first, even for anonymous callers.
    """
    if session is None:
        raise UnauthorizedError()
    return session
