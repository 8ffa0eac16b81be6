"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Group is the tenant root; every other entity carries group_id
      (Approval reaches its group through Ledger)

Design Decisions:
    - One file per entity for locality (Ledger and Approval share one: they change together)
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from groupdesk.models.group import Group  # noqa: F401
from groupdesk.models.member import Member  # noqa: F401
from groupdesk.models.invite_code import InviteCode  # noqa: F401
from groupdesk.models.chat_thread import ChatThread  # noqa: F401
from groupdesk.models.todo_item import TodoItem  # noqa: F401
from groupdesk.models.ledger import Ledger, Approval  # noqa: F401
from groupdesk.models.fiscal_year_close import FiscalYearClose  # noqa: F401
