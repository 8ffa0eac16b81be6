"""Initial schema — groups, members, invites, threads, todos, ledgers, closes.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-16

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps(*, updated: bool = False) -> list[sa.Column]:
    cols = [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]
    if updated:
        cols.append(
            sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        )
    return cols


def upgrade() -> None:
    op.create_table(
        "groups",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("fiscal_year_start_month", sa.Integer, nullable=False, server_default="4"),
        *_timestamps(),
    )

    op.create_table(
        "members",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("group_id", sa.Integer, sa.ForeignKey("groups.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("display_name", sa.String(100), nullable=False),
        sa.Column("role", sa.String(30), nullable=False, server_default="member"),
        *_timestamps(),
    )
    op.create_index("ix_members_group_id", "members", ["group_id"])

    op.create_table(
        "invite_codes",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("group_id", sa.Integer, sa.ForeignKey("groups.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("code", sa.String(64), nullable=False, unique=True),
        sa.Column("role", sa.String(30), nullable=True),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.Column("used_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("used_by_member_id", sa.Integer, sa.ForeignKey("members.id", ondelete="SET NULL"), nullable=True),
    )
    op.create_index("ix_invite_codes_group_id", "invite_codes", ["group_id"])

    op.create_table(
        "chat_threads",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("group_id", sa.Integer, sa.ForeignKey("groups.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="OPEN"),
        *_timestamps(updated=True),
    )
    op.create_index("ix_chat_threads_group_id", "chat_threads", ["group_id"])

    op.create_table(
        "todo_items",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("group_id", sa.Integer, sa.ForeignKey("groups.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("created_by_member_id", sa.Integer, sa.ForeignKey("members.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("assigned_member_id", sa.Integer, sa.ForeignKey("members.id", ondelete="SET NULL"), nullable=True),
        sa.Column("source_thread_id", sa.Integer, sa.ForeignKey("chat_threads.id", ondelete="SET NULL"), nullable=True),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("body", sa.Text, nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="TODO"),
        sa.Column("due_date", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(updated=True),
    )
    op.create_index("ix_todo_items_group_id", "todo_items", ["group_id"])

    op.create_table(
        "ledgers",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("group_id", sa.Integer, sa.ForeignKey("groups.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("created_by_member_id", sa.Integer, sa.ForeignKey("members.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("amount", sa.Integer, nullable=False),
        sa.Column("receipt_url", sa.Text, nullable=True),
        sa.Column("notes", sa.Text, nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="PENDING"),
        *_timestamps(updated=True),
    )
    op.create_index("ix_ledgers_group_id", "ledgers", ["group_id"])

    op.create_table(
        "approvals",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("ledger_id", sa.Integer, sa.ForeignKey("ledgers.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("acted_by_member_id", sa.Integer, sa.ForeignKey("members.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("action", sa.String(20), nullable=False),
        sa.Column("comment", sa.Text, nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_approvals_ledger_id", "approvals", ["ledger_id"])

    op.create_table(
        "fiscal_year_closes",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("group_id", sa.Integer, sa.ForeignKey("groups.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("fiscal_year", sa.Integer, nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="DRAFT"),
        sa.Column("confirmed_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("group_id", "fiscal_year", name="uq_fiscal_year_close_group_year"),
    )
    op.create_index("ix_fiscal_year_closes_group_id", "fiscal_year_closes", ["group_id"])


def downgrade() -> None:
    op.drop_table("fiscal_year_closes")
    op.drop_table("approvals")
    op.drop_table("ledgers")
    op.drop_table("todo_items")
    op.drop_table("chat_threads")
    op.drop_table("invite_codes")
    op.drop_table("members")
    op.drop_table("groups")
