"""
Project Canvas Backend - Database Session Management
=====================================================

What:  Async SQLAlchemy engine, session factory, FastAPI dependency and the
       session scope used by the CLI utilities.
How:   Creates an async engine with connection pooling. Every consumer gets
       one session, and the session is closed on every exit path.
Who:   Route handlers (via Depends), the sync/seed/migrate commands.
When:  Engine is created at module import; sessions are created per-request
       or per-command.

Transactions:
    Write services commit explicitly and roll back on SQLAlchemyError before
    raising DatabaseError. The dependency below still rolls back on any
    escaping exception, so an aborted request never leaves a half-written
    transaction on the pooled connection.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from canvas_journal.config import settings


def _engine_options() -> Dict[str, Any]:
    """Pool options for server databases; SQLite uses its own pool classes."""
    options: Dict[str, Any] = {"echo": settings.log_level == "DEBUG"}
    if not settings.is_sqlite:
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return options


# ── Engine Configuration ──────────────────────────────────────────────────
engine: AsyncEngine = create_async_engine(settings.database_url, **_engine_options())

# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: ORM rows stay readable after commit for serialization
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """Base class for all ORM models; its metadata drives Alembic and create_schema()."""
    pass


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the route handler
        3. On error: rolls back the transaction
        4. Always: closes the session (returns connection to pool)

    Example usage in a route:
        @router.get("/api/canvas")
        async def get_canvas(db: AsyncSession = Depends(get_db_session)):
            return await canvas_service.build_payload(db)
    """
    async with async_session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


@asynccontextmanager
async def session_scope() -> AsyncGenerator[AsyncSession, None]:
    """
    Session for one-shot commands (sync-data, seed).

    Same release guarantees as get_db_session(); commit stays with the
    command so that a whole import is one transaction.
    """
    async with async_session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def dispose_engine() -> None:
    """
    What:  Gracefully closes all connections in the pool.
    When:  Application shutdown and the end of every CLI command.
    """
    await engine.dispose()
