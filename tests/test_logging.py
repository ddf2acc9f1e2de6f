"""Tests for the structured logging system (stock_kernel/logging_config.py)."""

import json
import logging
from datetime import UTC, datetime
from io import StringIO

import pytest
from sqlalchemy.exc import OperationalError

from stock_kernel.db.engine import drop_tables
from stock_kernel.exceptions import InvalidInputError, StorageFailureError
from stock_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    get_logger,
    reset_logging,
)


@pytest.fixture(autouse=True)
def _clean_logging():
    """Reset logging state between tests and restore the suite's setup."""
    reset_logging()
    LogContext.clear()
    yield
    LogContext.clear()
    reset_logging()
    configure_logging(level=logging.DEBUG)


def _make_handler() -> tuple[logging.Handler, StringIO]:
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    return handler, stream


def _parse_all_logs(stream: StringIO) -> list[dict]:
    lines = stream.getvalue().strip().split("\n")
    return [json.loads(line) for line in lines if line]


class TestStructuredFormatter:

    def test_basic_json_output(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        get_logger("test").info("hello")

        record = _parse_all_logs(stream)[0]
        assert record["level"] == "INFO"
        assert record["message"] == "hello"
        assert record["logger"] == "stock_kernel.test"
        assert "ts" in record

    def test_extra_fields_included(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        get_logger("test").info("item_added", extra={"item_id": 7, "owner_id": "1"})

        record = _parse_all_logs(stream)[0]
        assert record["item_id"] == 7
        assert record["owner_id"] == "1"

    def test_datetime_and_bytes_serialized(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        when = datetime(2024, 1, 1, tzinfo=UTC)
        get_logger("test").info("x", extra={"when": when, "blob": b"\x01\xff"})

        record = _parse_all_logs(stream)[0]
        assert record["when"] == when.isoformat()
        assert record["blob"] == "01ff"

    def test_exception_fields(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        try:
            raise InvalidInputError("quantity", "Quantity must be between 0 and 999999")
        except InvalidInputError:
            get_logger("test").exception("rejected")

        record = _parse_all_logs(stream)[0]
        assert record["exc_type"] == "InvalidInputError"
        assert record["exc_code"] == "INVALID_INPUT"
        assert record["exc_field"] == "quantity"
        assert "traceback" in record

    def test_credential_fields_redacted(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        get_logger("test").info("x", extra={"salt": "ab12", "password": "Secret123", "username": "bob"})

        record = _parse_all_logs(stream)[0]
        assert record["salt"] == "[redacted]"
        assert record["password"] == "[redacted]"
        assert record["username"] == "bob"
        assert "Secret123" not in stream.getvalue()

    def test_driver_error_not_expanded(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        params = {"salt": "ab12"}
        try:
            raise OperationalError("INSERT", params, Exception("locked"), hide_parameters=True)
        except OperationalError:
            get_logger("test").exception("failed")

        record = _parse_all_logs(stream)[0]
        assert record["exc_type"] == "OperationalError"
        assert "exc_params" not in record
        assert "ab12" not in stream.getvalue()

    def test_level_filtering(self):
        handler, stream = _make_handler()
        configure_logging(level=logging.WARNING, handler=handler)
        logger = get_logger("test")
        logger.info("hidden")
        logger.warning("shown")

        assert [r["message"] for r in _parse_all_logs(stream)] == ["shown"]


class TestLogContext:

    def test_context_fields_included(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        LogContext.set(correlation_id="abc", actor_id="1")
        get_logger("test").info("hello")

        record = _parse_all_logs(stream)[0]
        assert record["correlation_id"] == "abc"
        assert record["actor_id"] == "1"

    def test_bind_restores_previous_values(self):
        LogContext.set(operation="outer")
        with LogContext.bind(operation="inner"):
            assert LogContext.get_all()["operation"] == "inner"
        assert LogContext.get_all()["operation"] == "outer"

    def test_none_values_ignored(self):
        LogContext.set(actor_id=None)
        assert LogContext.get_all() == {}

    def test_unknown_field_rejected(self):
        with pytest.raises(TypeError):
            LogContext.set(tenant="x")

    def test_clear(self):
        LogContext.set(correlation_id="abc", actor_id="1", operation="add_item")
        LogContext.clear()
        assert LogContext.get_all() == {}

    def test_storage_failure_carries_operation(self, inventory_store, engine):
        handler, stream = _make_handler()
        configure_logging(level=logging.DEBUG, handler=handler)
        drop_tables(engine)
        with pytest.raises(StorageFailureError):
            inventory_store.add_item("Widget", 1, "1")

        record = next(r for r in _parse_all_logs(stream) if r["message"] == "storage_failure")
        assert record["operation"] == "add_item"
        assert record["failed_operation"] == "add_item"
        assert LogContext.get_all() == {}


class TestConfigureLogging:

    def test_idempotent(self):
        handler, _ = _make_handler()
        second, _ = _make_handler()
        configure_logging(handler=handler)
        configure_logging(handler=handler)
        configure_logging(handler=second)
        handlers = logging.getLogger("stock_kernel").handlers
        assert handlers.count(handler) == 1
        assert second not in handlers

    def test_reset_clears_handlers(self):
        handler, _ = _make_handler()
        configure_logging(handler=handler)
        reset_logging()
        assert handler not in logging.getLogger("stock_kernel").handlers
