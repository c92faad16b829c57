"""create deposits table

Revision ID: 003
Revises: 002
Create Date: 2026-10-19 10:20:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "deposits",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("membership_id", sa.Integer(), nullable=False),
        sa.Column("amount", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["membership_id"], ["memberships.id"], ondelete="CASCADE"),
        sa.CheckConstraint("amount >= 0", name="ck_deposits_amount_non_negative"),
    )
    op.create_index("ix_deposits_id", "deposits", ["id"], unique=False)
    op.create_index("ix_deposits_membership_id", "deposits", ["membership_id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_deposits_membership_id", table_name="deposits")
    op.drop_index("ix_deposits_id", table_name="deposits")
    op.drop_table("deposits")
