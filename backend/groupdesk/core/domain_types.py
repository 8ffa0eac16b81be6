"""Domain Types — identity aliases and status enums shared across the codebase.

Invariants:
    - All entity ids are positive integers
    - All valid states encoded as Enums — no raw string matching in services
    - ROLE_MEMBER is the role granted when an invite does not name one

Design Decisions:
    - NewType over wrapper classes: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders, compare equal to DB strings
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

GroupId = NewType("GroupId", int)
MemberId = NewType("MemberId", int)
ThreadId = NewType("ThreadId", int)
TodoId = NewType("TodoId", int)


ROLE_MEMBER = "member"


# ─── Enums ───────────────────────────────────────────────────────

class ThreadStatus(str, Enum):
    """Chat thread states. Both are stable; members may move either way."""
    OPEN = "OPEN"
    CLOSED = "CLOSED"


class TodoStatus(str, Enum):
    """Todo states. Logically ordered, but any value may follow any other."""
    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"


class LedgerStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class FiscalYearCloseStatus(str, Enum):
    DRAFT = "DRAFT"
    CONFIRMED = "CONFIRMED"
