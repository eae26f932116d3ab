# Services package init
"""
Inventory Service — Services Layer
===================================

What:  Business logic sitting between routes (HTTP) and in-memory state.

Service Inventory:
    - InventoryService: Item collection and its lifecycle operations
    - PhotoService: Photo cache directory (store, existence, path resolution)
    - route_policy: 404-vs-405 decision for requests no route handled
"""
