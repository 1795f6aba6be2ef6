"""
Project Canvas Backend - Path-Scoped CORS
==========================================

What:  Different CORS policies for the public and admin route groups.
How:   A thin ASGI router in front of two Starlette CORSMiddleware
       instances; requests outside both prefixes get no CORS headers.

Policies (origin is CORS_ORIGIN for both):
    /api/canvas   GET                      Content-Type
    /api/admin    GET, POST, PUT, DELETE   Content-Type, Authorization
"""

from typing import List, Sequence, Tuple

from starlette.middleware.cors import CORSMiddleware
from starlette.types import ASGIApp, Receive, Scope, Send

from canvas_journal.config import settings

PUBLIC_METHODS = ["GET"]
PUBLIC_HEADERS = ["Content-Type"]
ADMIN_METHODS = ["GET", "POST", "PUT", "DELETE"]
ADMIN_HEADERS = ["Content-Type", "Authorization"]
EXPOSED_HEADERS = ["X-Request-ID", "Retry-After", "RateLimit-Limit", "RateLimit-Remaining"]


def _matches(path: str, prefix: str) -> bool:
    return path == prefix or path.startswith(prefix + "/")


class ScopedCORSMiddleware:
    """Dispatch each HTTP request to the CORS policy of its path prefix."""

    def __init__(self, app: ASGIApp, origin: str = "") -> None:
        self.app = app
        origins = [origin or settings.cors_origin]
        self.policies: List[Tuple[str, ASGIApp]] = [
            ("/api/canvas", self._policy(origins, PUBLIC_METHODS, PUBLIC_HEADERS)),
            ("/api/admin", self._policy(origins, ADMIN_METHODS, ADMIN_HEADERS)),
        ]

    def _policy(
        self, origins: List[str], methods: Sequence[str], headers: Sequence[str]
    ) -> ASGIApp:
        return CORSMiddleware(
            self.app,
            allow_origins=origins,
            allow_methods=methods,
            allow_headers=headers,
            expose_headers=EXPOSED_HEADERS,
        )

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http":
            path = scope.get("path", "")
            for prefix, policy in self.policies:
                if _matches(path, prefix):
                    await policy(scope, receive, send)
                    return
        await self.app(scope, receive, send)
