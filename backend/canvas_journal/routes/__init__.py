# Routes package init
"""
Project Canvas Backend - API Routes Package
============================================

Route Inventory:
    - health.py:  GET  /health                      (liveness + database flag)
    - canvas.py:  GET  /api/canvas                  (public payload, rate limited)
    - admin.py:   POST /api/admin/hotspots          (upsert)
                  PUT  /api/admin/hotspots/{id}     (partial update)
                  DELETE /api/admin/hotspots/{id}   (delete)
                  POST /api/admin/bulk              (replace in one transaction)
                  GET  /api/admin/export            (all rows, export mode)

Routes handle HTTP concerns only; business rules live in services.
"""
