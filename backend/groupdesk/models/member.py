"""Member ORM — an authenticated participant of exactly one group.

Invariants:
    - group_id is non-nullable; a member never moves between groups
    - role defaults to "member" when the redeemed invite names none
    - email is unique and stored lowercase; email and password_hash are set
      together (members who joined without credentials have neither)
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from groupdesk.core.domain_types import ROLE_MEMBER
from groupdesk.db.base import Base


class Member(Base):
    __tablename__ = "members"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    group_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("groups.id", ondelete="RESTRICT"),
        nullable=False, index=True,
    )
    display_name: Mapped[str] = mapped_column(Text, nullable=False)
    role: Mapped[str] = mapped_column(
        String(30), nullable=False, default=ROLE_MEMBER,
    )
    email: Mapped[str | None] = mapped_column(
        Text, nullable=True, unique=True, index=True,
    )
    password_hash: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    group: Mapped["Group"] = relationship(
        "Group", back_populates="members", lazy="raise",
    )
