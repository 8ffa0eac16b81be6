"""FiscalYearClose ORM — the closing record of one group's fiscal year."""

from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from groupdesk.core.domain_types import FiscalYearCloseStatus
from groupdesk.db.base import Base


class FiscalYearClose(Base):
    __tablename__ = "fiscal_year_closes"
    __table_args__ = (
        UniqueConstraint("group_id", "fiscal_year", name="uq_fiscal_year_close_group_year"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    group_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("groups.id", ondelete="RESTRICT"),
        nullable=False, index=True,
    )
    fiscal_year: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=FiscalYearCloseStatus.DRAFT.value,
    )
    confirmed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
