# Middleware package init
"""
Project Canvas Backend - Middleware Package
============================================

What:  Cross-cutting concerns applied around the route handlers.

Middleware Chain (outermost first):
    Request → [Scoped CORS] → [Request ID] → [Logging] → [Rate Limit] → Route Handler

    1. Scoped CORS answers preflights and decorates every response of the
       two API groups, including 429s.
    2. Request ID is set before anything logs.
    3. Logging records every response, rejected ones included.
    4. Rate Limit counts /api/canvas requests only.
"""
