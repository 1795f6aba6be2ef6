"""
Project Canvas Backend - Schema Bootstrap and Additive Migrations
==================================================================

What:  Table creation for empty databases and the guarded `type`/`video`
       column migration.
How:   Plain synchronous functions taking a SQLAlchemy Connection, so the
       same code runs inside Alembic (op.get_bind()) and inside async
       engines (AsyncConnection.run_sync()).
Who:   Alembic revision 002, the `migrate-add-type-video` and `seed`
       commands, and the test suite.

Idempotence:
    add_type_video_columns() inspects the live table before every ALTER.
    Re-running it against an up-to-date schema executes no DDL and never
    touches existing values.
"""

import logging
from typing import List

from sqlalchemy import inspect, text
from sqlalchemy.engine import Connection

from canvas_journal.database import Base
import canvas_journal.models  # noqa: F401  (registers tables on Base.metadata)

logger = logging.getLogger(__name__)

# Column name → DDL fragment. Defaults keep pre-existing rows valid.
TYPE_VIDEO_COLUMNS = {
    "type": "TEXT NOT NULL DEFAULT 'text'",
    "video": "TEXT NOT NULL DEFAULT ''",
}


def create_schema(connection: Connection) -> None:
    """Create every table that does not exist yet (no-op for existing ones)."""
    Base.metadata.create_all(connection, checkfirst=True)


def add_type_video_columns(connection: Connection) -> List[str]:
    """
    Add the `type` and `video` columns to `hotspots` when they are missing.

    Returns:
        Names of the columns that were actually added, in DDL order.
        An empty list means the schema was already current.
    """
    existing = {column["name"] for column in inspect(connection).get_columns("hotspots")}
    added: List[str] = []

    for name, ddl in TYPE_VIDEO_COLUMNS.items():
        if name in existing:
            logger.info("Column hotspots.%s already present, skipping", name)
            continue
        connection.execute(text(f"ALTER TABLE hotspots ADD COLUMN {name} {ddl}"))
        logger.info("Added column hotspots.%s", name)
        added.append(name)

    return added
