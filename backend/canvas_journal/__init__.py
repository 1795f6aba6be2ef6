"""
Project Canvas Backend - Package Initializer
=============================================

Layered architecture:

    ┌─────────────────────────────────────┐
    │   Routes (API) / CLI commands       │  ← HTTP and process concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← upserts, payload building, sync
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

`canvas_journal.client` holds the browser-side view logic (state, zoom
geometry, modals, design mode) as plain Python, independent of the server.
"""

__version__ = "1.0.0"
