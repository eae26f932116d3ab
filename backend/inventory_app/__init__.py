"""
Inventory Service — Application Package Initializer
====================================================

What: Marks the `inventory_app` directory as a Python package.
Why:  Enables module imports like `from inventory_app.config import Settings`.
Who:  Used by the CLI launcher, uvicorn and pytest.

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Record lifecycle, photo storage
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← In-memory records + Pydantic
    └─────────────────────────────────────┘

    There is no persistence layer: records live in the InventoryService
    instance owned by the application. Only photo files reach the disk.
"""

__version__ = "1.0.0"
