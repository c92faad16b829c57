"""create memberships table

Revision ID: 002
Revises: 001
Create Date: 2026-10-19 10:10:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "memberships",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("member_id", sa.Integer(), nullable=False),
        sa.Column("begin", sa.DateTime(), nullable=False),
        sa.Column("end", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["member_id"], ["members.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_memberships_id", "memberships", ["id"], unique=False)
    op.create_index("ix_memberships_member_id", "memberships", ["member_id"], unique=False)

    # Partial unique index: at most one open membership (end IS NULL) per member.
    # Both SQLite and PostgreSQL support partial indexes.
    end_is_null = sa.text('"end" IS NULL')
    op.create_index(
        "uq_memberships_open_member",
        "memberships",
        ["member_id"],
        unique=True,
        sqlite_where=end_is_null,
        postgresql_where=end_is_null,
    )


def downgrade() -> None:
    op.drop_index("uq_memberships_open_member", table_name="memberships")
    op.drop_index("ix_memberships_member_id", table_name="memberships")
    op.drop_index("ix_memberships_id", table_name="memberships")
    op.drop_table("memberships")
