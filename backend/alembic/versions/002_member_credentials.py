"""Member credentials — optional email/password sign-in, unbounded display name.

Revision ID: 002_member_credentials
Revises: 001_initial
Create Date: 2026-10-16

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "002_member_credentials"
down_revision: Union[str, None] = "001_initial"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    with op.batch_alter_table("members") as batch:
        batch.alter_column(
            "display_name",
            existing_type=sa.String(100),
            type_=sa.Text(),
            existing_nullable=False,
        )
        batch.add_column(sa.Column("email", sa.Text(), nullable=True))
        batch.add_column(sa.Column("password_hash", sa.Text(), nullable=True))
    op.create_index("ix_members_email", "members", ["email"], unique=True)


def downgrade() -> None:
    op.drop_index("ix_members_email", table_name="members")
    with op.batch_alter_table("members") as batch:
        batch.drop_column("password_hash")
        batch.drop_column("email")
        batch.alter_column(
            "display_name",
            existing_type=sa.Text(),
            type_=sa.String(100),
            existing_nullable=False,
        )
