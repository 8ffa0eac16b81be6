"""Auth Schemas — member sign-in with email and password.

Invariants:
    - email is trimmed and lowercased before lookup, matching how join stores it
    - password is taken verbatim; whitespace is part of the secret
"""

from pydantic import Field, field_validator

from groupdesk.schemas.base import CamelModel


def normalize_email(v: object) -> object:
    """Trim and lowercase strings; anything else is left for type validation."""
    return v.strip().lower() if isinstance(v, str) else v


class LoginRequest(CamelModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)

    @field_validator("email", mode="before")
    @classmethod
    def normalize(cls, v: object) -> object:
        return normalize_email(v)
