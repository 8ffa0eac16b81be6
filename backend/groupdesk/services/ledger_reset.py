"""Ledger Reset — deletes one group's ledger data in foreign-key order.

Invariants:
    - Order: approvals of the group's ledgers → the group's ledgers → its fiscal year closes
    - Every statement filters by the given group id; other groups are untouched
    - All three deletions commit together (a failure leaves the group intact)
    - Each step's row count is logged and returned
"""

import logging
from dataclasses import dataclass

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from groupdesk.core.domain_types import GroupId
from groupdesk.models.fiscal_year_close import FiscalYearClose
from groupdesk.models.group import Group
from groupdesk.models.ledger import Approval, Ledger

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LedgerResetSummary:
    group_id: GroupId
    approvals_deleted: int
    ledgers_deleted: int
    fiscal_year_closes_deleted: int


async def find_first_group(db: AsyncSession) -> Group | None:
    result = await db.execute(select(Group).order_by(Group.id).limit(1))
    return result.scalar_one_or_none()


async def reset_group_ledgers(db: AsyncSession, group_id: GroupId) -> LedgerResetSummary:
    group_ledgers = select(Ledger.id).where(Ledger.group_id == group_id)

    approvals = await db.execute(
        delete(Approval)
        .where(Approval.ledger_id.in_(group_ledgers))
        .execution_options(synchronize_session=False),
    )
    logger.info(
        f"Deleted {approvals.rowcount} approvals",
        extra={"group_id": group_id, "deleted": approvals.rowcount},
    )

    ledgers = await db.execute(
        delete(Ledger)
        .where(Ledger.group_id == group_id)
        .execution_options(synchronize_session=False),
    )
    logger.info(
        f"Deleted {ledgers.rowcount} ledgers",
        extra={"group_id": group_id, "deleted": ledgers.rowcount},
    )

    closes = await db.execute(
        delete(FiscalYearClose)
        .where(FiscalYearClose.group_id == group_id)
        .execution_options(synchronize_session=False),
    )
    logger.info(
        f"Deleted {closes.rowcount} fiscal year closes",
        extra={"group_id": group_id, "deleted": closes.rowcount},
    )

    await db.commit()
    return LedgerResetSummary(
        group_id=group_id,
        approvals_deleted=approvals.rowcount,
        ledgers_deleted=ledgers.rowcount,
        fiscal_year_closes_deleted=closes.rowcount,
    )
