"""Request Body Parsing — lenient JSON read plus schema validation with fixed messages.

Invariants:
    - read_json_body never raises: unparseable or non-object bodies become {}
    - Schema failures surface as RequestBodyError with the endpoint's message,
      never as raw Pydantic errors

Design Decisions:
    - Bodies are parsed by hand rather than as FastAPI body parameters so the
      write guard and session check run before any body validation
"""

from typing import TypeVar

from fastapi import Request
from pydantic import BaseModel, ValidationError

from groupdesk.core.errors import RequestBodyError

SchemaT = TypeVar("SchemaT", bound=BaseModel)


async def read_json_body(request: Request) -> dict:
    try:
        data = await request.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


def validate_body(schema: type[SchemaT], body: dict, message: str) -> SchemaT:
    try:
        return schema.model_validate(body)
    except ValidationError as e:
        raise RequestBodyError(message) from e
