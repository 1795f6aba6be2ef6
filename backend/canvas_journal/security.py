"""
Project Canvas Backend - Admin Bearer Token Check
==================================================

What:  FastAPI dependency guarding every /api/admin route.
How:   Reads the Authorization header, requires the `Bearer <token>` form and
       compares the token with ADMIN_TOKEN in constant time.
Who:   Attached to the admin router via `dependencies=[Depends(...)]`, so it
       runs before body validation and before any handler logic.

Outcomes:
    header missing / not "Bearer ..."        → AuthenticationError (401)
    token differs, or ADMIN_TOKEN unset       → AuthorizationError (403)
"""

import hmac
import logging
from typing import Optional

from fastapi import Header

from canvas_journal.config import settings
from canvas_journal.exceptions import AuthenticationError, AuthorizationError

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


def extract_bearer_token(authorization: Optional[str]) -> str:
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise AuthenticationError()
    return authorization[len(BEARER_PREFIX):]


def token_matches(token: str, expected: str) -> bool:
    if not expected:
        return False
    return hmac.compare_digest(token.encode("utf-8"), expected.encode("utf-8"))


async def require_admin_token(authorization: Optional[str] = Header(default=None)) -> None:
    token = extract_bearer_token(authorization)
    if not token_matches(token, settings.admin_token):
        if not settings.admin_token:
            logger.error("Admin request rejected: ADMIN_TOKEN is not configured")
        raise AuthorizationError()
