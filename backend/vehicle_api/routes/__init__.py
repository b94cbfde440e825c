# Routes package init
"""
Vehicle Registry Backend — API Routes Package
===============================================

Route Inventory:
    - root.py:      GET  /                 (fixed status string)
    - vehicles.py:  GET  /vehicles/test    (public marker string)
                    POST /admin/vehicles   (admin-only registration)
    - health.py:    GET  /health           (service health check)

Routes stay thin: extract the request data, call the service, format the
response. Storage rules live in services/.
"""
