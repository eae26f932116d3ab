# Routes package init
"""
Inventory Service — API Routes Package
=======================================

Route Inventory:
    - inventory.py: /register and /inventory/... (items and photos)
    - search.py:    POST /search
    - forms.py:     GET /, /RegisterForm.html, /SearchForm.html

Routes are THIN: they decode the request, call InventoryService and shape
the response. Anything no route matches is settled by the fallback policy
in services/route_policy.py.
"""
