"""
migrate-add-type-video: add hotspots.type and hotspots.video when missing.

Safe to run repeatedly; columns that already exist are left alone.
"""

import logging
import sys
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError

from canvas_journal.cli import (
    CommandResult,
    configure_command_logging,
    finish,
    run_database_command,
)
from canvas_journal.database import engine
from canvas_journal.schema import add_type_video_columns

logger = logging.getLogger(__name__)


async def migrate_add_type_video() -> CommandResult:
    logger.info("Adding type and video columns to hotspots table...")
    try:
        async with engine.begin() as conn:
            added = await conn.run_sync(add_type_video_columns)
    except SQLAlchemyError as e:
        logger.error("Migration failed: %s", str(e), exc_info=True)
        return CommandResult.failure(f"Migration failed: {type(e).__name__}")

    if not added:
        return CommandResult.success("Migration complete! No columns needed.")
    return CommandResult.success(f"Migration complete! Added: {', '.join(added)}")


def main(argv: Optional[List[str]] = None) -> int:
    configure_command_logging()
    return finish(run_database_command(migrate_add_type_video()))


if __name__ == "__main__":
    sys.exit(main())
