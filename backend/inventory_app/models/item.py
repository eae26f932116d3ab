"""
Inventory Service — In-Memory Item Model
=========================================

What:  The record held by InventoryService for each registered item.
Why:   Records are plain process memory; there is no ORM or table behind them.

Lifecycle:
    1. Created by InventoryService.register() (id assigned, fields populated)
    2. Mutated in place by update_fields() and update_photo()
    3. Removed by delete(); the id is never handed out again
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class InventoryItem:
    """One inventory item."""

    id: int
    name: str
    description: str = ""
    # Generated filename inside the photo cache directory, or None
    photo: Optional[str] = None

    @property
    def photo_url(self) -> str:
        """Where clients fetch this item's photo."""
        return f"/inventory/{self.id}/photo"
