"""
Project Canvas Backend - Rate Limiting Middleware
==================================================

What:  Per-IP sliding window rate limiter for the public read API.
How:   Keeps the request timestamps of each client IP in memory; timestamps
       older than the window are dropped on every request.
Who:   Applies only to paths under /api/canvas. The admin API and /health
       are never counted.

Algorithm: Sliding Window Log
    1. Drop timestamps older than now - window
    2. If the remaining count >= limit, reject with 429 and Retry-After
    3. Otherwise record now and forward the request

Responses that pass the limiter carry RateLimit-Limit and
RateLimit-Remaining headers.

Scope:
    State lives in the process. Multiple workers each enforce their own
    window; a shared store (e.g. Redis) is needed to enforce one global limit.
"""

import logging
import time
from collections import defaultdict
from typing import Dict, List, Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from canvas_journal.config import settings
from canvas_journal.exceptions import RateLimitExceededError
from canvas_journal.middleware.request_id import request_id_var

logger = logging.getLogger(__name__)

PUBLIC_API_PREFIX = "/api/canvas"


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    In-memory sliding window rate limiter.

    Configuration (constructor, falling back to settings):
        max_requests:    RATE_LIMIT_MAX requests per window (default 60)
        window_seconds:  RATE_LIMIT_WINDOW_MS / 1000 (default 60)
        path_prefix:     only paths starting with this prefix are limited
    """

    CLEANUP_EVERY = 1000

    def __init__(
        self,
        app,
        max_requests: Optional[int] = None,
        window_seconds: Optional[float] = None,
        path_prefix: str = PUBLIC_API_PREFIX,
    ):
        super().__init__(app)
        self.max_requests = max_requests or settings.rate_limit_max
        self.window_seconds = window_seconds or settings.rate_limit_window_seconds
        self.path_prefix = path_prefix
        self._requests: Dict[str, List[float]] = defaultdict(list)
        self._seen = 0

    def applies_to(self, path: str) -> bool:
        return path == self.path_prefix or path.startswith(self.path_prefix + "/")

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if not self.applies_to(request.url.path):
            return await call_next(request)

        client_ip = (
            getattr(request.client, "host", "unknown")
            if request.client
            else "unknown"
        )

        now = time.time()
        window_start = now - self.window_seconds

        timestamps = [ts for ts in self._requests[client_ip] if ts > window_start]
        self._requests[client_ip] = timestamps

        if len(timestamps) >= self.max_requests:
            retry_after = int(timestamps[0] + self.window_seconds - now) + 1
            logger.warning(
                "Rate limit exceeded for IP %s: %d requests in %.0fs window",
                client_ip,
                len(timestamps),
                self.window_seconds,
            )
            return self._reject(RateLimitExceededError(retry_after=retry_after))

        timestamps.append(now)

        self._seen += 1
        if self._seen % self.CLEANUP_EVERY == 0:
            self._cleanup_inactive_ips(window_start)

        response = await call_next(request)
        response.headers["RateLimit-Limit"] = str(self.max_requests)
        response.headers["RateLimit-Remaining"] = str(max(self.max_requests - len(timestamps), 0))
        return response

    def _reject(self, exc: RateLimitExceededError) -> JSONResponse:
        return JSONResponse(
            status_code=429,
            content={
                "error": "rate_limit_exceeded",
                "message": exc.message,
                "details": {"retry_after": exc.retry_after},
                "request_id": request_id_var.get(""),
            },
            headers={
                "Retry-After": str(exc.retry_after),
                "RateLimit-Limit": str(self.max_requests),
                "RateLimit-Remaining": "0",
            },
        )

    def _cleanup_inactive_ips(self, window_start: float) -> None:
        """Forget IPs with no request inside the current window."""
        inactive_ips = [
            ip for ip, timestamps in self._requests.items()
            if not timestamps or max(timestamps) < window_start
        ]
        for ip in inactive_ips:
            del self._requests[ip]

        if inactive_ips:
            logger.debug("Cleaned up %d inactive IP entries", len(inactive_ips))
