"""Group ORM — the tenant boundary that owns every other entity.

Invariants:
    - id is an auto-increment integer primary key
    - Members, invites, threads, todos, ledgers and closes all reference a group
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from groupdesk.db.base import Base


class Group(Base):
    """Group aggregate root — isolated collaboration space."""
    __tablename__ = "groups"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    fiscal_year_start_month: Mapped[int] = mapped_column(
        Integer, nullable=False, default=4,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    members: Mapped[list["Member"]] = relationship(
        "Member", back_populates="group", lazy="raise",
    )
