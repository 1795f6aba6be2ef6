"""
Project Canvas Backend - Logging Configuration
===============================================

What:  One root logger setup shared by the API server and the CLI utilities.
How:   logging.basicConfig(force=True) on stdout with the level from
       LOG_LEVEL; chatty third-party loggers are raised to WARNING.
When:  Server lifespan startup, and at the top of every command's main().

Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
"""

import logging
import sys
from typing import Optional, TextIO

from canvas_journal.config import settings

NOISY_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "httpcore", "httpx")


def setup_logging(level: Optional[str] = None, stream: Optional[TextIO] = None) -> None:
    """Commands pass stream=sys.stderr so stdout stays free for their output."""
    logging.basicConfig(
        level=getattr(logging, level or settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(stream or sys.stdout)],
        force=True,
    )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
