"""
QuantityEditor -- optimistic quantity edits over a caller-owned item list.

The two-step contract:
    1. replace the item in the local list with the new quantity,
    2. ask the store to persist it,
    3. put the previous item back if the store answers False or fails.

The list belongs to the caller (a screen, a CLI session).  The store never
sees it; the editor is the only thing that mutates it.
"""

from enum import Enum

from stock_kernel.domain.config import StoreConfig
from stock_kernel.domain.inventory_item import InventoryItem
from stock_kernel.exceptions import StorageFailureError
from stock_kernel.logging_config import get_logger
from stock_kernel.services.inventory_store import InventoryStore

logger = get_logger("services.quantity_editor")

QUANTITY_STEP = 1


class EditOutcome(str, Enum):
    APPLIED = "applied"
    REVERTED = "reverted"
    AT_LIMIT = "at_limit"


class QuantityEditor:
    """Applies quantity changes locally first and reverts on rejection."""

    def __init__(self, store: InventoryStore, items: list[InventoryItem], config: StoreConfig):
        self._store = store
        self.items = items
        self._config = config

    def increment(self, index: int) -> EditOutcome:
        return self.set_quantity(index, self.items[index].quantity + QUANTITY_STEP)

    def decrement(self, index: int) -> EditOutcome:
        return self.set_quantity(index, self.items[index].quantity - QUANTITY_STEP)

    def set_quantity(self, index: int, quantity: int) -> EditOutcome:
        """
        Change one item's quantity.

        Returns:
            AT_LIMIT if ``quantity`` is outside the configured range (nothing
            changes), APPLIED if the store confirmed, REVERTED if the store
            returned False or raised StorageFailureError.

        Other store errors (InvalidInputError) revert and propagate.
        """
        if not self._config.min_quantity <= quantity <= self._config.max_quantity:
            return EditOutcome.AT_LIMIT

        previous = self.items[index]
        updated = previous.with_quantity(quantity)
        self.items[index] = updated

        try:
            confirmed = self._store.update_item(updated)
        except StorageFailureError:
            confirmed = False
        except Exception:
            self.items[index] = previous
            raise

        if not confirmed:
            self.items[index] = previous
            logger.warning(
                "quantity_edit_reverted",
                extra={"item_id": previous.id, "restored_quantity": previous.quantity},
            )
            return EditOutcome.REVERTED
        return EditOutcome.APPLIED

    def remove(self, index: int) -> bool:
        """Delete the item (owner-scoped) and drop it locally only on success."""
        item = self.items[index]
        try:
            removed = self._store.delete_item(item.id, owner_id=item.owner_id)
        except StorageFailureError:
            removed = False
        if removed:
            del self.items[index]
        return removed

    def reload(self, owner_id: str) -> bool:
        """Replace the local list from storage.  False if the read failed."""
        listing = self._store.list_items_for_owner(owner_id)
        if listing.ok:
            self.items[:] = listing.items
        return listing.ok
