"""TodoItem ORM — a group task with an unrestricted TODO/IN_PROGRESS/DONE status.

Invariants:
    - group_id scopes every lookup
    - status always holds a TodoStatus value

Design Decisions:
    - source_thread_id kept nullable: todos may be converted from a chat thread
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from groupdesk.core.domain_types import TodoStatus
from groupdesk.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TodoItem(Base):
    __tablename__ = "todo_items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    group_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("groups.id", ondelete="RESTRICT"),
        nullable=False, index=True,
    )
    created_by_member_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("members.id", ondelete="RESTRICT"), nullable=False,
    )
    assigned_member_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("members.id", ondelete="SET NULL"), nullable=True,
    )
    source_thread_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("chat_threads.id", ondelete="SET NULL"), nullable=True,
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    body: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=TodoStatus.TODO.value,
    )
    due_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow,
    )
