"""
Project Canvas Backend - One-Shot Command Utilities
====================================================

Commands (console scripts declared in pyproject.toml):
    sync-data               import a payload file / export the store
    seed                    load the bundled sample payload
    migrate-add-type-video  add hotspots.type / hotspots.video if missing
    md-to-json              escape a Markdown file into a JSON string body

Command contract:
    Each command is a function (async for anything touching the database)
    returning a CommandResult. Only `main()` turns the result into a process
    exit status, so commands stay callable from tests and other code.
"""

import asyncio
import logging
import sys
from dataclasses import dataclass
from typing import Awaitable

from canvas_journal.database import dispose_engine
from canvas_journal.logging_setup import setup_logging

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    ok: bool
    message: str = ""

    @classmethod
    def success(cls, message: str = "") -> "CommandResult":
        return cls(ok=True, message=message)

    @classmethod
    def failure(cls, message: str) -> "CommandResult":
        return cls(ok=False, message=message)

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1


def configure_command_logging() -> None:
    """Logs go to stderr; stdout carries command output (exports, escaped text)."""
    setup_logging(stream=sys.stderr)


def run_database_command(command: Awaitable[CommandResult]) -> CommandResult:
    """Run a database command on a fresh event loop and release the pool afterwards."""

    async def runner() -> CommandResult:
        try:
            return await command
        finally:
            await dispose_engine()

    return asyncio.run(runner())


def finish(result: CommandResult) -> int:
    if result.ok:
        if result.message:
            logger.info(result.message)
    else:
        logger.error(result.message)
    return result.exit_code
