"""
Project Canvas Backend - Request Logging Middleware
====================================================

What:  One access-log line per HTTP request.
How:   Measures wall time around call_next and logs method, path, status,
       duration, request ID and client IP, tagged with the API area the
       path belongs to (public / admin / other). Level follows the status
       class: 5xx → ERROR, 4xx → WARNING, everything else → INFO.
When:  Inside RequestIDMiddleware, so the request ID is already set.

Never logged: request bodies and the Authorization header.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from canvas_journal.middleware.request_id import request_id_var

logger = logging.getLogger("canvas_journal.access")

# Probe traffic, not worth a log line.
SKIPPED_PATHS = {"/health"}

AREAS = (
    ("/api/admin", "admin"),
    ("/api/canvas", "public"),
)


def area_for_path(path: str) -> str:
    for prefix, area in AREAS:
        if path.startswith(prefix):
            return area
    return "other"


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in SKIPPED_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        fields = {
            "request_id": request_id_var.get(""),
            "area": area_for_path(path),
            "method": request.method,
            "path": path,
            "status": response.status_code,
            "duration_ms": round(elapsed_ms, 2),
            "client_ip": request.client.host if request.client else "unknown",
        }
        logger.log(
            level_for_status(response.status_code),
            "[%(area)s] %(method)s %(path)s %(status)d %(duration_ms).1fms [%(request_id)s] from %(client_ip)s",
            fields,
            extra=fields,
        )
        return response
