"""
Module: stock_kernel.models.item
Responsibility: ORM persistence for inventory item rows.
Architecture position: Kernel > Models.  May import from db/base.py only.

Invariants enforced:
    - quantity >= 0, length(name) > 0, length(owner_id) > 0 (CHECK
      constraints backing the validation done before I/O).
    - owner_id references users.id by value only.  There is no foreign key
      and no cascade: the two stores are peers.
    - owner_id never changes after insert; updates match on (id, owner_id).
"""

from sqlalchemy import CheckConstraint, Index
from sqlalchemy.orm import Mapped, mapped_column

from stock_kernel.db.base import Base


class ItemRecord(Base):
    """One named stock line belonging to exactly one owner."""

    __tablename__ = "items"

    __table_args__ = (
        Index("idx_owner_id", "owner_id"),
        CheckConstraint("quantity >= 0", name="ck_items_quantity"),
        CheckConstraint("length(name) > 0", name="ck_items_name"),
        CheckConstraint("length(owner_id) > 0", name="ck_items_owner_id"),
        {"sqlite_autoincrement": True},
    )

    name: Mapped[str] = mapped_column(nullable=False)

    quantity: Mapped[int] = mapped_column(nullable=False, default=0, server_default="0")

    owner_id: Mapped[str] = mapped_column(nullable=False)

    def __repr__(self) -> str:
        return f"<ItemRecord {self.id} {self.name!r} x{self.quantity} owner={self.owner_id}>"
