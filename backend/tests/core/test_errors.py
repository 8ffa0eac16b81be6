"""Error Hierarchy — codes, statuses and the response envelope.

Tests cover:
    - Each client error maps to its HTTP status and code
    - to_response() carries code, message, category, severity, timestamp
    - Not-found messages carry only the requested id
"""

import pytest

from groupdesk.core.errors import (
    CsrfRejectedError,
    DatabaseError,
    EmailInUseError,
    ErrorCategory,
    InvalidCredentialsError,
    InvalidIdError,
    InviteUnavailableError,
    RateLimitedError,
    RequestBodyError,
    ResourceNotFoundError,
    UnauthorizedError,
)


@pytest.mark.parametrize(
    "error, status, code",
    [
        (RequestBodyError("bad"), 400, "VALIDATION_ERROR"),
        (InvalidIdError("thread"), 400, "INVALID_ID"),
        (UnauthorizedError(), 401, "UNAUTHORIZED"),
        (CsrfRejectedError("origin"), 403, "CSRF_REJECTED"),
        (ResourceNotFoundError("Thread", 5), 404, "RESOURCE_NOT_FOUND"),
        (InviteUnavailableError(), 400, "INVITE_UNAVAILABLE"),
        (EmailInUseError(), 400, "EMAIL_IN_USE"),
        (InvalidCredentialsError(), 400, "INVALID_CREDENTIALS"),
        (RateLimitedError(3), 429, "RATE_LIMITED"),
        (DatabaseError("down", "execute"), 503, "DATABASE_ERROR"),
    ],
)
def test_status_and_code(error, status, code):
    assert error.http_status == status
    assert error.code == code
    assert error.is_client_error is (status < 500)


def test_response_envelope():
    body = RequestBodyError("Invite code and display name are required.").to_response()
    error = body["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert error["message"] == "Invite code and display name are required."
    assert error["category"] == "validation"
    assert error["severity"] == "warning"
    assert "timestamp" in error


def test_invite_unavailable_is_a_conflict():
    assert InviteUnavailableError().category is ErrorCategory.CONFLICT


def test_rate_limited_records_retry_after():
    assert RateLimitedError(12).context.retry_after_seconds == 12


def test_not_found_message_mentions_only_the_id():
    assert ResourceNotFoundError("Todo", 9).message == "Todo '9' not found"
