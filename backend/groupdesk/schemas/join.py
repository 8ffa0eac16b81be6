"""Join Schemas — invite redemption request and response.

Invariants:
    - code is trimmed and uppercased; displayName is trimmed
    - Non-string values are rejected the same way as missing ones
    - email and password are optional; blank values count as absent
    - No upper length bound on code or displayName: an oversized code simply
      matches no invite
"""

from pydantic import Field, field_validator

from groupdesk.core.invite_rules import normalize_invite_code
from groupdesk.schemas.auth import normalize_email
from groupdesk.schemas.base import CamelModel


class JoinRequest(CamelModel):
    """Invite redemption — code and displayName required after normalization."""
    code: str = Field(min_length=1)
    display_name: str = Field(min_length=1)
    email: str | None = None
    password: str | None = None

    @field_validator("code", mode="before")
    @classmethod
    def normalize_code(cls, v: object) -> object:
        return normalize_invite_code(v) if isinstance(v, str) else v

    @field_validator("display_name", mode="before")
    @classmethod
    def strip_display_name(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v

    @field_validator("email", mode="before")
    @classmethod
    def normalize_optional_email(cls, v: object) -> object:
        v = normalize_email(v)
        return None if v == "" else v

    @field_validator("password", mode="before")
    @classmethod
    def blank_password_is_absent(cls, v: object) -> object:
        return None if v == "" else v


class JoinResponse(CamelModel):
    success: bool = True
    member_id: int
    group_id: int
