"""Pure domain layer: configuration value, item value object, validation rules, clock."""

from stock_kernel.domain.clock import Clock, DeterministicClock, SystemClock
from stock_kernel.domain.config import StoreConfig
from stock_kernel.domain.inventory_item import NEW_ITEM_ID, InventoryItem

__all__ = [
    "Clock",
    "DeterministicClock",
    "InventoryItem",
    "NEW_ITEM_ID",
    "StoreConfig",
    "SystemClock",
]
