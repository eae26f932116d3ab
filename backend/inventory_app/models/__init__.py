from inventory_app.models.item import InventoryItem

__all__ = ["InventoryItem"]
