"""
sync-data: move a payload document between a JSON file and the database.

Usage:
    sync-data --file <path> [--replace]   Sync JSON to DB
    sync-data --export [--out <path>]     Export DB to JSON

Import upserts canvas and settings, then the hotspots (all deleted first
with --replace). Entries missing a required field are skipped with a
warning. Everything else is committed in one transaction.
"""

import argparse
import json
import logging
import sys
from typing import List, Optional, TextIO

import aiofiles

from canvas_journal.cli import (
    CommandResult,
    configure_command_logging,
    finish,
    run_database_command,
)
from canvas_journal.database import session_scope
from canvas_journal.exceptions import CanvasJournalError
from canvas_journal.services.sync_service import sync_service

logger = logging.getLogger(__name__)


async def read_document(path: str):
    async with aiofiles.open(path, mode="r", encoding="utf-8") as f:
        return json.loads(await f.read())


def dump_document(document: dict) -> str:
    return json.dumps(document, indent=2, ensure_ascii=False)


async def sync_from_file(path: str, replace: bool = False) -> CommandResult:
    try:
        document = await read_document(path)
    except FileNotFoundError:
        return CommandResult.failure(f"Sync failed: file not found: {path}")
    except OSError as e:
        return CommandResult.failure(f"Sync failed: cannot read {path}: {e}")
    except json.JSONDecodeError as e:
        return CommandResult.failure(f"Sync failed: {path} is not valid JSON: {e}")

    try:
        async with session_scope() as db:
            report = await sync_service.import_document(db, document, replace=replace)
    except CanvasJournalError as e:
        return CommandResult.failure(f"Sync failed: {e.message}")

    return CommandResult.success(f"{report.summary()}. Sync complete.")


async def export_data(out: Optional[str] = None, stdout: Optional[TextIO] = None) -> CommandResult:
    try:
        async with session_scope() as db:
            document = await sync_service.export_document(db)
    except CanvasJournalError as e:
        return CommandResult.failure(f"Export failed: {e.message}")

    text = dump_document(document)
    if out:
        try:
            async with aiofiles.open(out, mode="w", encoding="utf-8") as f:
                await f.write(text)
        except OSError as e:
            return CommandResult.failure(f"Export failed: cannot write {out}: {e}")
        return CommandResult.success(f"Exported to {out}")

    (stdout or sys.stdout).write(text)
    return CommandResult.success()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sync-data",
        description="Sync a canvas payload file into the database, or export the database.",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--file", metavar="PATH", help="JSON payload to import")
    mode.add_argument("--export", action="store_true", help="Export the database as JSON")
    parser.add_argument(
        "--replace",
        action="store_true",
        help="With --file: delete every hotspot before importing",
    )
    parser.add_argument("--out", metavar="PATH", help="With --export: write to this file instead of stdout")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.file and not args.export:
        parser.print_usage()
        return 0

    configure_command_logging()
    if args.export:
        result = run_database_command(export_data(args.out))
    else:
        result = run_database_command(sync_from_file(args.file, replace=args.replace))
    return finish(result)


if __name__ == "__main__":
    sys.exit(main())
