"""Create canvas_config, settings and hotspots tables

Revision ID: 001
Revises: None
Create Date: 2025-01-10 00:00:00.000000+00:00

What:  The first-release schema. `hotspots` has no `type` or `video`
       columns yet; revision 002 adds them.

Rollback: downgrade() drops all three tables (all data lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "canvas_config",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("width", sa.Integer(), nullable=False),
        sa.Column("height", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_canvas_config"),
    )

    op.create_table(
        "settings",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("zoom_on_click", sa.Float(), nullable=True),
        sa.Column("min_zoom", sa.Float(), nullable=True),
        sa.Column("max_zoom", sa.Float(), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_settings"),
    )

    op.create_table(
        "hotspots",
        sa.Column("id", sa.String(255), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("enabled", sa.Boolean(), nullable=False, server_default=sa.text("TRUE")),
        # Region: canvas pixel rectangle
        sa.Column("x", sa.Float(), nullable=False),
        sa.Column("y", sa.Float(), nullable=False),
        sa.Column("width", sa.Float(), nullable=False),
        sa.Column("height", sa.Float(), nullable=False),
        # Content
        sa.Column("title", sa.Text(), nullable=False, server_default=sa.text("''")),
        sa.Column("description", sa.Text(), nullable=False, server_default=sa.text("''")),
        sa.Column("image", sa.Text(), nullable=False, server_default=sa.text("''")),
        sa.Column("sequence", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_hotspots"),
    )

    op.create_index("idx_hotspots_sequence", "hotspots", ["sequence"])


def downgrade() -> None:
    op.drop_index("idx_hotspots_sequence", table_name="hotspots")
    op.drop_table("hotspots")
    op.drop_table("settings")
    op.drop_table("canvas_config")
