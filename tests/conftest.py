"""
Pytest fixtures for the stock kernel test suite.

Provides:
- A fresh in-memory SQLite database per test (tables created and dropped)
- StoreConfig with the reference bounds
- CredentialStore / InventoryStore wired to the test database
- Structured log capture
"""

import json
import logging
from io import StringIO

import pytest
from sqlalchemy.orm import sessionmaker

from stock_kernel.db.engine import build_engine, create_tables, drop_tables
from stock_kernel.domain.clock import DeterministicClock
from stock_kernel.domain.config import StoreConfig
from stock_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)
from stock_kernel.services.credential_store import CredentialStore
from stock_kernel.services.inventory_store import InventoryStore


REFERENCE_BOUNDS = dict(
    min_username_length=3,
    max_username_length=20,
    min_password_length=8,
    max_password_length=64,
    max_item_name_length=255,
    min_quantity=0,
    max_quantity=999999,
    max_owner_id_length=100,
    max_login_attempts=5,
    lockout_duration_ms=300000,
)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: property tests that build a database per example"
    )


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture stock_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs, credential_store):
            credential_store.register_user("bob_99", "Secret123")
            logs = captured_logs()
            assert any(r["message"] == "user_registered" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("stock_kernel")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# =============================================================================
# Database fixtures
# =============================================================================


@pytest.fixture
def engine():
    """Fresh in-memory database for one test."""
    eng = build_engine("sqlite://")
    create_tables(eng)
    yield eng
    drop_tables(eng)
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, expire_on_commit=False)


# =============================================================================
# Domain / store fixtures
# =============================================================================


@pytest.fixture
def store_config() -> StoreConfig:
    return StoreConfig(**REFERENCE_BOUNDS)


@pytest.fixture
def clock() -> DeterministicClock:
    return DeterministicClock()


@pytest.fixture
def credential_store(session_factory, store_config, clock) -> CredentialStore:
    return CredentialStore(session_factory, store_config, clock=clock)


@pytest.fixture
def inventory_store(session_factory, store_config) -> InventoryStore:
    return InventoryStore(session_factory, store_config)
