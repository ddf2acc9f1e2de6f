"""
Low-stock alerts.

Builds a short text alert listing an owner's items at or below a
threshold and hands it to a caller-supplied ``send`` callable.  Delivery
(SMS or anything else) is the caller's concern; messages are kept within a
single 160-character SMS segment.
"""

from typing import Callable, Sequence

from stock_kernel.domain.inventory_item import InventoryItem
from stock_kernel.logging_config import get_logger
from stock_kernel.services.inventory_store import InventoryStore

logger = get_logger("services.alerts")

MAX_SMS_LENGTH = 160
ALERT_PREFIX = "Stock Shark low stock: "
ELLIPSIS = "…"


def compose_low_stock_alert(
    items: Sequence[InventoryItem],
    max_length: int = MAX_SMS_LENGTH,
) -> str | None:
    """
    One-line alert such as ``Stock Shark low stock: Bolts (0), Nuts (2)``.

    Items that do not fit are summarised as ``+N more``; if not even the
    first item fits, its name is cut with an ellipsis.  Returns None when
    there is nothing to report.
    """
    if max_length < len(ALERT_PREFIX) + 16:
        raise ValueError(f"max_length {max_length} is too small for an alert")
    if not items:
        return None

    parts = [f"{item.name} ({item.quantity})" for item in items]
    for count in range(len(parts), 0, -1):
        rest = len(parts) - count
        text = ALERT_PREFIX + ", ".join(parts[:count])
        if rest:
            text += f" +{rest} more"
        if len(text) <= max_length:
            return text

    suffix = f" +{len(parts) - 1} more" if len(parts) > 1 else ""
    room = max_length - len(ALERT_PREFIX) - len(suffix) - len(ELLIPSIS)
    return ALERT_PREFIX + parts[0][:room] + ELLIPSIS + suffix


class LowStockNotifier:
    """Checks one owner's stock and sends an alert when something is low."""

    def __init__(
        self,
        store: InventoryStore,
        send: Callable[[str], None],
        threshold: int,
        max_length: int = MAX_SMS_LENGTH,
    ):
        self._store = store
        self._send = send
        self.threshold = threshold
        self._max_length = max_length

    def notify(self, owner_id: str) -> bool:
        """Send an alert for ``owner_id``.  Returns True if one was sent."""
        low = self._store.low_stock_items(owner_id, self.threshold)
        message = compose_low_stock_alert(low, self._max_length)
        if message is None:
            return False
        self._send(message)
        logger.info(
            "low_stock_alert_sent",
            extra={"owner_id": owner_id, "item_count": len(low), "threshold": self.threshold},
        )
        return True
