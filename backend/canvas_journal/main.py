"""
Project Canvas Backend - FastAPI Application Factory
=====================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   uvicorn (`canvas_journal.main:app`), the `canvas-journal` console
       script and the test suite (a fresh app per test).

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                      FastAPI App                         │
    │                                                          │
    │  Middleware Chain:                                       │
    │  ┌────────────┐ ┌────────┐ ┌─────────┐ ┌──────────────┐  │
    │  │ Scoped CORS│→│ Req ID │→│ Logging │→│ Rate Limit   │  │
    │  └────────────┘ └────────┘ └─────────┘ └──────────────┘  │
    │                                                          │
    │  Routes:                                                 │
    │  ┌─────────────┐ ┌──────────────────────┐ ┌───────────┐  │
    │  │ GET /health │ │ GET /api/canvas      │ │ /api/admin│  │
    │  └─────────────┘ └──────────────────────┘ └───────────┘  │
    │                                                          │
    │  Exception Handlers:                                     │
    │  Validation→400 │ Auth→401/403 │ NotFound→404 │ DB→500    │
    └──────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:   logging, configuration check (ADMIN_TOKEN), banner
    Shutdown:  dispose the database engine
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from canvas_journal import __version__
from canvas_journal.config import settings
from canvas_journal.database import dispose_engine
from canvas_journal.exceptions import (
    AuthenticationError,
    AuthorizationError,
    CanvasJournalError,
    DatabaseError,
    NotFoundError,
    RateLimitExceededError,
    ValidationError,
)
from canvas_journal.logging_setup import setup_logging
from canvas_journal.middleware.cors import ScopedCORSMiddleware
from canvas_journal.middleware.logging import RequestLoggingMiddleware
from canvas_journal.middleware.rate_limit import RateLimitMiddleware
from canvas_journal.middleware.request_id import RequestIDMiddleware, request_id_var
from canvas_journal.routes import admin, canvas, health

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("Project Canvas backend %s starting up...", __version__)

    # A missing ADMIN_TOKEN only disables the admin API; the public read
    # path keeps serving.
    try:
        settings.validate_required_for_production()
    except ValueError as e:
        logger.error("Configuration error: %s", str(e))

    logger.info("Server ready at http://%s:%d", settings.host, settings.port)
    logger.info("CORS origin: %s", settings.cors_origin)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Project Canvas backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def error_body(code: str, message: str, **extra) -> dict:
    body = {"error": code, "message": message, "request_id": request_id_var.get("")}
    body.update(extra)
    return body


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map the exception hierarchy onto status codes and the JSON error body.

    Handler hierarchy:
        ValidationError, RequestValidationError → 400
        AuthenticationError                     → 401
        AuthorizationError                      → 403
        NotFoundError                           → 404
        RateLimitExceededError                  → 429
        DatabaseError, CanvasJournalError       → 500 (generic message)
        Exception                               → 500 (generic message)

    Driver errors, SQL and stack traces are logged, never returned.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s %s", request_id_var.get(""), exc.message, exc.context)
        return JSONResponse(
            status_code=400,
            content=error_body("validation_error", exc.message, details=exc.context),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        logger.warning("[%s] Request body rejected: %d errors", request_id_var.get(""), len(errors))
        return JSONResponse(
            status_code=400,
            content=error_body(
                "validation_error",
                "Request body is invalid",
                details={"fields": [".".join(str(p) for p in e.get("loc", ())) for e in errors]},
            ),
        )

    @app.exception_handler(AuthenticationError)
    async def handle_authentication_error(request: Request, exc: AuthenticationError):
        return JSONResponse(
            status_code=401,
            content=error_body("unauthorized", exc.message),
            headers={"WWW-Authenticate": "Bearer"},
        )

    @app.exception_handler(AuthorizationError)
    async def handle_authorization_error(request: Request, exc: AuthorizationError):
        logger.warning("[%s] Admin request with invalid token", request_id_var.get(""))
        return JSONResponse(status_code=403, content=error_body("forbidden", exc.message))

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content=error_body("not_found", exc.message))

    @app.exception_handler(RateLimitExceededError)
    async def handle_rate_limit(request: Request, exc: RateLimitExceededError):
        return JSONResponse(
            status_code=429,
            content=error_body("rate_limit_exceeded", exc.message, details=exc.context),
            headers={"Retry-After": str(exc.retry_after)},
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error("[%s] Database error: %s | Context: %s", request_id_var.get(""), exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content=error_body("server_error", "An internal error occurred. Please try again later."),
        )

    @app.exception_handler(CanvasJournalError)
    async def handle_application_error(request: Request, exc: CanvasJournalError):
        logger.error("[%s] Unhandled application error: %s | Context: %s", request_id_var.get(""), exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content=error_body("server_error", "An internal error occurred. Please try again later."),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error("[%s] Unexpected error: %s", request_id_var.get(""), str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content=error_body(
                "internal_server_error",
                "An unexpected error occurred. Please try again later.",
            ),
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Every call builds independent middleware state (rate-limit windows
    included), which is what the tests rely on.
    """
    app = FastAPI(
        title="Project Canvas API",
        description=(
            "Backend for an interactive-image journal: a large illustration "
            "with clickable hotspots, each revealing text, an image or a video."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: CORS → RequestID → Logging → RateLimit → routes
    app.add_middleware(RateLimitMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(ScopedCORSMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(health.router)
    app.include_router(canvas.router)
    app.include_router(admin.router)

    return app


app = create_app()


def run() -> None:
    """Entry point of the `canvas-journal` console script."""
    uvicorn.run(
        "canvas_journal.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
