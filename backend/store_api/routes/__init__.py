# Routes package init
"""
NeoLayer Store API — API Routes Package
========================================

Route Inventory:
    - products.py:  GET/POST /api/products, PUT/DELETE /api/products/{id}
    - orders.py:    POST/GET /api/orders, GET /api/orders/status/{status},
                    PUT /api/orders/{id}/status, DELETE /api/orders/{id}
    - settings.py:  GET /api/settings, PUT /api/settings/theme
    - health.py:    GET /api/health

Design Principle:
    Routes are THIN. They take the StoreContext from get_store(), call a
    service, and return its result. Status codes for failures come from the
    exception handlers registered in main.py.
"""
