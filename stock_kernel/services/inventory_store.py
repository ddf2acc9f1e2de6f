"""
InventoryStore -- owner-scoped item persistence.

Responsibility:
    Owns ItemRecord rows.  Validates every field against StoreConfig before
    I/O and performs each create, update and delete in its own
    all-or-nothing transaction.  Returns InventoryItem values, never ORM
    rows.

Architecture position:
    Kernel > Services.  Never calls CredentialStore; ``owner_id`` is the
    string form of an account id supplied by the caller.

Invariants enforced:
    - update_item matches on (id, owner_id) and writes only name and
      quantity.  An item owned by someone else is never touched, and the
      call reports False instead of raising.
    - owner_id is fixed at insert; no operation rewrites it.
    - The store returns an honest boolean from mutations and never mutates
      caller-held items.  Reverting an optimistic local change on False is
      the caller's job (see stock_services.quantity_editor).

Failure modes:
    - InvalidInputError: any field out of bounds, non-positive id.
    - StorageFailureError: engine fault on a write; nothing changed.
    - Read helpers swallow engine faults into their empty result
      ([], 0, False) after logging.  ``list_items_for_owner`` reports the
      fault through ``ItemListing.ok`` for callers that need to tell
      "no items" from "read failed".
"""

from dataclasses import dataclass

from sqlalchemy import delete, func, select, update

from stock_kernel.domain.inventory_item import InventoryItem
from stock_kernel.domain.validation import (
    validate_item_id,
    validate_item_name,
    validate_owner_id,
    validate_quantity,
)
from stock_kernel.exceptions import InvalidInputError, StorageFailureError
from stock_kernel.logging_config import get_logger
from stock_kernel.models.item import ItemRecord
from stock_kernel.services.base import BaseStore

logger = get_logger("services.inventory")


@dataclass(frozen=True)
class ItemListing:
    """An owner's items plus whether the read actually succeeded."""

    items: tuple[InventoryItem, ...]
    ok: bool


def _to_item(record: ItemRecord) -> InventoryItem:
    return InventoryItem(
        id=record.id,
        name=record.name,
        quantity=record.quantity,
        owner_id=record.owner_id,
    )


class InventoryStore(BaseStore):
    """Create, list, update and delete items for one owner at a time."""

    # -- writes -------------------------------------------------------------

    def add_item(self, name: str, quantity: int, owner_id: str) -> int:
        """
        Insert a new item and return its id.

        Raises:
            InvalidInputError: name, quantity or owner_id out of bounds.
            StorageFailureError: the insert did not commit.
        """
        clean_name = validate_item_name(name, self.config)
        validate_quantity(quantity, self.config)
        owner = validate_owner_id(owner_id, self.config)

        record = ItemRecord(name=clean_name, quantity=quantity, owner_id=owner)
        with self._transaction("add_item") as session:
            session.add(record)
            session.flush()
            item_id = record.id

        logger.info(
            "item_added",
            extra={"item_id": item_id, "owner_id": owner, "quantity": quantity},
        )
        return item_id

    def add(self, item: InventoryItem) -> InventoryItem:
        """Persist a not-yet-saved item and return it with its new id."""
        if not isinstance(item, InventoryItem):
            raise InvalidInputError("item", "Item cannot be null")
        if not item.is_new:
            raise InvalidInputError("id", f"Item {item.id} is already persisted")
        item_id = self.add_item(item.name, item.quantity, item.owner_id)
        return item.with_id(item_id)

    def update_item(self, item: InventoryItem) -> bool:
        """
        Write the item's name and quantity back to its row.

        Returns:
            True if the (id, owner_id) pair matched a row, else False.

        Raises:
            InvalidInputError: a field is out of bounds or id is not positive.
            StorageFailureError: the update did not commit.
        """
        if not isinstance(item, InventoryItem):
            raise InvalidInputError("item", "Item cannot be null")
        name = validate_item_name(item.name, self.config)
        validate_quantity(item.quantity, self.config)
        owner = validate_owner_id(item.owner_id, self.config)
        validate_item_id(item.id)

        with self._transaction("update_item") as session:
            result = session.execute(
                update(ItemRecord)
                .where(ItemRecord.id == item.id, ItemRecord.owner_id == owner)
                .values(name=name, quantity=item.quantity)
                .execution_options(synchronize_session=False)
            )
            matched = result.rowcount > 0

        if matched:
            logger.info(
                "item_updated",
                extra={"item_id": item.id, "owner_id": owner, "quantity": item.quantity},
            )
        else:
            logger.warning(
                "item_update_unmatched",
                extra={"item_id": item.id, "owner_id": owner},
            )
        return matched

    def delete_item(self, item_id: int, owner_id: str | None = None) -> bool:
        """
        Delete an item by id.

        Args:
            item_id: Positive item id.
            owner_id: When given, the row must also belong to this owner.
                Without it the match is on id alone.

        Returns:
            True iff a row was removed.
        """
        validate_item_id(item_id)
        stmt = delete(ItemRecord).where(ItemRecord.id == item_id)
        owner = None
        if owner_id is not None:
            owner = validate_owner_id(owner_id, self.config)
            stmt = stmt.where(ItemRecord.owner_id == owner)

        with self._transaction("delete_item") as session:
            result = session.execute(
                stmt.execution_options(synchronize_session=False)
            )
            removed = result.rowcount > 0

        logger.info(
            "item_deleted" if removed else "item_delete_unmatched",
            extra={"item_id": item_id, "owner_id": owner, "owner_scoped": owner is not None},
        )
        return removed

    # -- reads --------------------------------------------------------------

    def list_items_for_owner(self, owner_id: str) -> ItemListing:
        """All of the owner's items ordered by name, with a read status."""
        owner = validate_owner_id(owner_id, self.config)
        try:
            with self._transaction("items_for_owner") as session:
                records = session.execute(
                    select(ItemRecord)
                    .where(ItemRecord.owner_id == owner)
                    .order_by(ItemRecord.name.asc(), ItemRecord.id.asc())
                ).scalars().all()
                items = tuple(_to_item(r) for r in records)
        except StorageFailureError:
            logger.warning("items_read_failed", extra={"owner_id": owner})
            return ItemListing(items=(), ok=False)
        return ItemListing(items=items, ok=True)

    def items_for_owner(self, owner_id: str) -> list[InventoryItem]:
        """
        All of the owner's items ordered by name ascending.

        Empty when the owner has no items or when the read failed.
        """
        return list(self.list_items_for_owner(owner_id).items)

    def item_count_for_owner(self, owner_id: str) -> int:
        owner = validate_owner_id(owner_id, self.config)
        try:
            with self._transaction("item_count_for_owner") as session:
                return session.execute(
                    select(func.count())
                    .select_from(ItemRecord)
                    .where(ItemRecord.owner_id == owner)
                ).scalar_one()
        except StorageFailureError:
            return 0

    def item_exists(self, item_id: int, owner_id: str) -> bool:
        if isinstance(item_id, bool) or not isinstance(item_id, int) or item_id <= 0:
            return False
        owner = validate_owner_id(owner_id, self.config)
        try:
            with self._transaction("item_exists") as session:
                found = session.execute(
                    select(ItemRecord.id)
                    .where(ItemRecord.id == item_id, ItemRecord.owner_id == owner)
                    .limit(1)
                ).scalar_one_or_none()
        except StorageFailureError:
            return False
        return found is not None

    def low_stock_items(self, owner_id: str, threshold: int) -> list[InventoryItem]:
        """
        The owner's items at or below ``threshold``, lowest quantity first.

        Raises:
            InvalidInputError: threshold outside the configured quantity range.
        """
        owner = validate_owner_id(owner_id, self.config)
        validate_quantity(threshold, self.config)
        try:
            with self._transaction("low_stock_items") as session:
                records = session.execute(
                    select(ItemRecord)
                    .where(ItemRecord.owner_id == owner, ItemRecord.quantity <= threshold)
                    .order_by(ItemRecord.quantity.asc(), ItemRecord.name.asc())
                ).scalars().all()
                return [_to_item(r) for r in records]
        except StorageFailureError:
            return []
