"""
Project Canvas Backend - Services Layer
========================================

What:  Business logic between routes (HTTP) and the database.
How:   Services accept sessions and validated schemas, apply the data rules
       and return ORM rows or payload models.

Service Inventory:
    - CanvasService:  read path, payload serialization (public + export)
    - HotspotService: admin writes (upsert, partial update, delete, bulk replace)
    - SyncService:    document import/export for the one-shot utilities
"""
