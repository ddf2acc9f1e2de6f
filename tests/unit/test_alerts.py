"""
Unit tests for low-stock alert composition.
"""

import pytest

from stock_kernel.domain.inventory_item import InventoryItem
from stock_services.alerts import (
    ALERT_PREFIX,
    MAX_SMS_LENGTH,
    LowStockNotifier,
    compose_low_stock_alert,
)


def _item(name, qty):
    return InventoryItem(id=1, name=name, quantity=qty, owner_id="1")


class TestComposeLowStockAlert:

    def test_nothing_to_report(self):
        assert compose_low_stock_alert([]) is None

    def test_lists_items(self):
        text = compose_low_stock_alert([_item("Bolts", 0), _item("Nuts", 2)])
        assert text == "Stock Shark low stock: Bolts (0), Nuts (2)"

    def test_overflow_summarised(self):
        items = [_item(f"Item number {i:02d}", i) for i in range(30)]
        text = compose_low_stock_alert(items)
        assert len(text) <= MAX_SMS_LENGTH
        assert text.startswith(ALERT_PREFIX + "Item number 00 (0)")
        assert text.endswith(" more")

    def test_single_long_name_truncated(self):
        text = compose_low_stock_alert([_item("x" * 255, 1), _item("y", 0)])
        assert len(text) <= MAX_SMS_LENGTH
        assert "…" in text
        assert text.endswith(" +1 more")

    def test_max_length_too_small(self):
        with pytest.raises(ValueError):
            compose_low_stock_alert([_item("A", 1)], max_length=10)


class TestLowStockNotifier:

    def test_sends_when_items_are_low(self, inventory_store, captured_logs):
        inventory_store.add_item("Bolts", 0, "1")
        inventory_store.add_item("Plenty", 500, "1")
        sent = []
        notifier = LowStockNotifier(inventory_store, sent.append, threshold=5)

        assert notifier.notify("1") is True
        assert sent == ["Stock Shark low stock: Bolts (0)"]
        assert any(r["message"] == "low_stock_alert_sent" for r in captured_logs())

    def test_silent_when_nothing_low(self, inventory_store):
        inventory_store.add_item("Plenty", 500, "1")
        sent = []
        notifier = LowStockNotifier(inventory_store, sent.append, threshold=5)
        assert notifier.notify("1") is False
        assert sent == []

    def test_other_owners_ignored(self, inventory_store):
        inventory_store.add_item("Bolts", 0, "2")
        sent = []
        assert LowStockNotifier(inventory_store, sent.append, threshold=5).notify("1") is False
