"""
seed: load the bundled sample payload (canvas_journal/data/data.json).

Creates missing tables, upserts canvas and settings and replaces every
hotspot with the bundled set.
"""

import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

import aiofiles

from canvas_journal.cli import (
    CommandResult,
    configure_command_logging,
    finish,
    run_database_command,
)
from canvas_journal.database import engine, session_scope
from canvas_journal.exceptions import CanvasJournalError
from canvas_journal.schema import create_schema
from canvas_journal.services.sync_service import sync_service

logger = logging.getLogger(__name__)

DATA_FILE = Path(__file__).resolve().parent.parent / "data" / "data.json"


async def seed(path: Path = DATA_FILE) -> CommandResult:
    try:
        async with aiofiles.open(path, mode="r", encoding="utf-8") as f:
            document = json.loads(await f.read())
    except (OSError, json.JSONDecodeError) as e:
        return CommandResult.failure(f"Seed failed: cannot load {path}: {e}")

    try:
        async with engine.begin() as conn:
            await conn.run_sync(create_schema)
        async with session_scope() as db:
            report = await sync_service.import_document(db, document, replace=True)
    except CanvasJournalError as e:
        return CommandResult.failure(f"Seed failed: {e.message}")

    return CommandResult.success(f"Seeded: canvas, settings, {report.synced} hotspots")


def main(argv: Optional[List[str]] = None) -> int:
    configure_command_logging()
    return finish(run_database_command(seed()))


if __name__ == "__main__":
    sys.exit(main())
