"""Add hotspots.type and hotspots.video

Revision ID: 002
Revises: 001
Create Date: 2025-03-02 00:00:00.000000+00:00

What:  Adds the modal type (default 'text') and the video URL (default '').
How:   Shares canvas_journal.schema.add_type_video_columns with the
       `migrate-add-type-video` command, so databases already patched by
       the command upgrade cleanly.
"""

from typing import Sequence, Union
from alembic import op

from canvas_journal.schema import add_type_video_columns

# revision identifiers
revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    add_type_video_columns(op.get_bind())


def downgrade() -> None:
    with op.batch_alter_table("hotspots") as batch_op:
        batch_op.drop_column("video")
        batch_op.drop_column("type")
