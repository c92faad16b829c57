"""create members table

Revision ID: 001
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "members",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("first_name", sa.String(length=100), nullable=False),
        sa.Column("last_name", sa.String(length=100), nullable=False),
        sa.Column("birthday", sa.Date(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        # Last names are unique across every member ever registered
        sa.UniqueConstraint("last_name", name="uq_members_last_name"),
        sa.CheckConstraint("length(first_name) > 0", name="ck_members_first_name_not_empty"),
        sa.CheckConstraint("length(last_name) > 0", name="ck_members_last_name_not_empty"),
    )
    op.create_index("ix_members_id", "members", ["id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_members_id", table_name="members")
    op.drop_table("members")
