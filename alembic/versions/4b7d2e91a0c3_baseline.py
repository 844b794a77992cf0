"""baseline

Revision ID: 4b7d2e91a0c3
Revises:
Create Date: 2026-10-19 09:12:44.518203

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "4b7d2e91a0c3"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "block",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("start", sa.Text(), nullable=True),
        sa.Column("end", sa.Text(), nullable=True),
        sa.Column("homeoffice", sa.Boolean(), nullable=False, server_default=sa.false()),
    )
    op.create_table(
        "pause",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("start", sa.Text(), nullable=True),
        sa.Column("end", sa.Text(), nullable=True),
        sa.Column(
            "block_id",
            sa.Integer(),
            sa.ForeignKey("block.id", ondelete="CASCADE"),
            nullable=False,
        ),
    )
    op.create_index("ix_pause_block_id", "pause", ["block_id"])
    current = op.create_table(
        "current",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("current_block_id", sa.Integer(), nullable=False),
        sa.Column("current_pause_id", sa.Integer(), nullable=False),
    )
    op.bulk_insert(current, [{"id": 1, "current_block_id": -1, "current_pause_id": -1}])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("current")
    op.drop_index("ix_pause_block_id", table_name="pause")
    op.drop_table("pause")
    op.drop_table("block")
