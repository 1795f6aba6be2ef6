"""
Project Canvas Backend - Health Check Route
============================================

What:  Liveness probe with a database connectivity flag.
How:   Runs SELECT 1 on a pooled connection. `status` stays "ok" while the
       process answers; `database` reports whether the store is reachable.
Who:   Docker health checks, load balancers, uptime monitors.
"""

import logging

from fastapi import APIRouter
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from canvas_journal import __version__
from canvas_journal.database import engine
from canvas_journal.schemas import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check() -> HealthResponse:
    db_status = "connected"
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        db_status = "disconnected"
        logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(status="ok", version=__version__, database=db_status)
