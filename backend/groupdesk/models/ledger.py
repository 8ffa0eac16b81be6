"""Ledger & Approval ORM — financial entries and the approval trail on each.

Invariants:
    - Ledger rows belong to one group; Approval rows reach the group only via ledger_id
    - Approvals reference ledgers with RESTRICT: delete approvals before their ledger
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from groupdesk.core.domain_types import LedgerStatus
from groupdesk.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Ledger(Base):
    __tablename__ = "ledgers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    group_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("groups.id", ondelete="RESTRICT"),
        nullable=False, index=True,
    )
    created_by_member_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("members.id", ondelete="RESTRICT"), nullable=False,
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    receipt_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=LedgerStatus.PENDING.value,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow,
    )

    approvals: Mapped[list["Approval"]] = relationship(
        "Approval", back_populates="ledger", lazy="raise",
    )


class Approval(Base):
    __tablename__ = "approvals"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    ledger_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("ledgers.id", ondelete="RESTRICT"),
        nullable=False, index=True,
    )
    acted_by_member_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("members.id", ondelete="RESTRICT"), nullable=False,
    )
    action: Mapped[str] = mapped_column(String(20), nullable=False)
    comment: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )

    ledger: Mapped["Ledger"] = relationship(
        "Ledger", back_populates="approvals", lazy="raise",
    )
