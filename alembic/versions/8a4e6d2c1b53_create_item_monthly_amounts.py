"""create item_monthly_amounts

Revision ID: 8a4e6d2c1b53
Revises: 3f1c2a9b7d10
Create Date: 2025-07-09
"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

revision: str = "8a4e6d2c1b53"
down_revision: Union[str, Sequence[str], None] = "3f1c2a9b7d10"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "item_monthly_amounts",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("item_id", sa.Integer, sa.ForeignKey("items.id", ondelete="CASCADE"), nullable=False),
        sa.Column("month", sa.String(7), nullable=False),
        sa.Column("amount", sa.Integer, nullable=False, server_default="0"),
        sa.UniqueConstraint("item_id", "month", name="uq_item_monthly_amounts_item_month"),
    )


def downgrade() -> None:
    op.drop_table("item_monthly_amounts")
