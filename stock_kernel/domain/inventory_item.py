"""
InventoryItem -- caller-facing value object for one stock line.

Responsibility:
    Immutable snapshot of an item as the caller sees it.  Callers keep their
    own lists of these; the store never holds or mutates them.  Changing a
    quantity means building a new value with ``with_quantity`` and handing it
    to ``InventoryStore.update_item``.

Invariants enforced at construction:
    - id is NEW_ITEM_ID (-1, not yet persisted) or a non-negative integer.
    - name and owner_id are trimmed and non-empty.
    - quantity is a non-negative integer.
    Configured length and range bounds are checked by the store, which owns
    the StoreConfig.
"""

from dataclasses import dataclass, replace

from stock_kernel.domain.config import StoreConfig
from stock_kernel.exceptions import InvalidInputError

NEW_ITEM_ID = -1
PLACEHOLDER_NAME = "New Item"


@dataclass(frozen=True)
class InventoryItem:
    """One named quantity owned by a single account."""

    id: int
    name: str
    quantity: int
    owner_id: str

    def __post_init__(self) -> None:
        if isinstance(self.id, bool) or not isinstance(self.id, int) or self.id < NEW_ITEM_ID:
            raise InvalidInputError("id", "Item ID must be -1 (unsaved) or non-negative")
        if not isinstance(self.name, str) or not self.name.strip():
            raise InvalidInputError("name", "Item name cannot be empty")
        object.__setattr__(self, "name", self.name.strip())
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int) or self.quantity < 0:
            raise InvalidInputError("quantity", "Quantity must be a non-negative integer")
        if not isinstance(self.owner_id, str) or not self.owner_id.strip():
            raise InvalidInputError("owner_id", "Owner ID cannot be empty")
        object.__setattr__(self, "owner_id", self.owner_id.strip())

    @classmethod
    def create(cls, name: str, quantity: int, owner_id: str) -> "InventoryItem":
        """An item that has not been persisted yet."""
        return cls(id=NEW_ITEM_ID, name=name, quantity=quantity, owner_id=owner_id)

    @classmethod
    def placeholder(cls, owner_id: str) -> "InventoryItem":
        return cls.create(PLACEHOLDER_NAME, 0, owner_id)

    @property
    def is_new(self) -> bool:
        return self.id == NEW_ITEM_ID

    @property
    def has_valid_id(self) -> bool:
        return self.id > 0

    def with_quantity(self, quantity: int) -> "InventoryItem":
        return replace(self, quantity=quantity)

    def with_name(self, name: str) -> "InventoryItem":
        return replace(self, name=name)

    def with_id(self, item_id: int) -> "InventoryItem":
        return replace(self, id=item_id)

    def is_at_minimum(self, config: StoreConfig) -> bool:
        return self.quantity <= config.min_quantity

    def is_at_maximum(self, config: StoreConfig) -> bool:
        return self.quantity >= config.max_quantity

    def display_label(self) -> str:
        return f"{self.name} (Qty: {self.quantity})"
