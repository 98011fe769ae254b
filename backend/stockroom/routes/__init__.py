# Routes package init
"""
Stockroom Backend — API Routes Package
========================================

Route Inventory:
    - users.py:       /api/users        (CRUD + PUT /api/users/{id}/password)
    - categories.py:  /api/categories   (CRUD)
    - products.py:    /api/products     (CRUD, ?category_id= filter)
    - health.py:      GET /health

Routes are thin: API-key dependency, body parsing, one service call,
status code. Business logic belongs in services.
"""
