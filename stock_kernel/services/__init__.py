"""Kernel stores."""

from stock_kernel.services.credential_store import CredentialStore
from stock_kernel.services.inventory_store import InventoryStore, ItemListing

__all__ = [
    "CredentialStore",
    "InventoryStore",
    "ItemListing",
]
