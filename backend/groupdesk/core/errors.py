"""Error Hierarchy — typed, categorized exceptions for all GroupDesk failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400-level) are expected traffic; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages
    - Not-found messages never reveal which group owns a row

Design Decisions:
    - Single hierarchy with GroupDeskError base: FastAPI global handler catches all
    - ErrorContext as dataclass: observability data without coupling to logging
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    SECURITY = "security"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for logs and clients."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    member_id: int | None = None
    group_id: int | None = None
    retry_after_seconds: int | None = None
    debug_info: dict[str, Any] | None = None


class GroupDeskError(Exception):
    """Base exception for all GroupDesk errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    @property
    def is_client_error(self) -> bool:
        return self.http_status < 500

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
            }
        }


# ─── Client Errors (400-level) ──────────────────────────────────

class RequestBodyError(GroupDeskError):
    """Request body is missing fields or carries out-of-range values."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )


class InvalidIdError(GroupDeskError):
    """Path identifier is not a positive integer."""
    def __init__(self, resource_type: str, context: ErrorContext | None = None):
        super().__init__(
            f"Invalid {resource_type} id", "INVALID_ID",
            ErrorCategory.VALIDATION, ErrorSeverity.WARNING, context, 400,
        )
        self.resource_type = resource_type


class UnauthorizedError(GroupDeskError):
    """No valid session accompanies a request that requires one."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Unauthorized", "UNAUTHORIZED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.INFO, context, 401,
        )


class CsrfRejectedError(GroupDeskError):
    """Origin or Referer does not match an allowed application origin."""
    def __init__(self, reason: str, context: ErrorContext | None = None):
        super().__init__(
            "Request rejected by cross-site request protection.",
            "CSRF_REJECTED", ErrorCategory.SECURITY,
            ErrorSeverity.WARNING, context, 403,
        )
        self.reason = reason


class RateLimitedError(GroupDeskError):
    """Too many write requests within the current window."""
    def __init__(self, retry_after_seconds: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.retry_after_seconds = retry_after_seconds
        super().__init__(
            "Too many requests. Please wait a moment and try again.",
            "RATE_LIMITED", ErrorCategory.SECURITY,
            ErrorSeverity.WARNING, ctx, 429,
        )


class ResourceNotFoundError(GroupDeskError):
    """Requested resource does not exist in the caller's group."""
    def __init__(
        self, resource_type: str, resource_id: int | str,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.INFO, context, 404,
        )


class InviteUnavailableError(GroupDeskError):
    """Invite code is unknown, expired or already redeemed."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "No usable invite code was found.",
            "INVITE_UNAVAILABLE", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 400,
        )


class EmailInUseError(GroupDeskError):
    """Another member already signs in with this email address."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "This email address is already in use.",
            "EMAIL_IN_USE", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 400,
        )


class InvalidCredentialsError(GroupDeskError):
    """Email/password pair does not match a member (never says which part failed)."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Email address or password is incorrect.",
            "INVALID_CREDENTIALS", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.INFO, context, 400,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(GroupDeskError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
