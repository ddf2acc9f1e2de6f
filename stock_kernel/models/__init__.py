"""ORM models.  Importing this package registers every table on Base.metadata."""

from stock_kernel.models.account import UserAccount
from stock_kernel.models.item import ItemRecord

__all__ = [
    "ItemRecord",
    "UserAccount",
]
