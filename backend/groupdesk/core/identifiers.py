"""Path identifier parsing — pure conversion of route segments to entity ids."""

from groupdesk.core.errors import InvalidIdError


def parse_positive_id(raw: str, resource_type: str) -> int:
    """Parse a path segment into a positive integer id.

    Only plain base-10 digits are accepted (surrounding whitespace is ignored),
    so signs, separators, decimals and zero all raise InvalidIdError.
    """
    value = raw.strip()
    if not value or not (value.isascii() and value.isdigit()):
        raise InvalidIdError(resource_type)
    parsed = int(value)
    if parsed <= 0:
        raise InvalidIdError(resource_type)
    return parsed
