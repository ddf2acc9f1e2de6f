"""
BaseStore -- common constructor and transaction contract for the stores.

Responsibility:
    Holds the session factory and StoreConfig every store is built with, and
    provides ``_transaction()``: one session per public operation, committed
    on success and rolled back on any exception.  Engine faults leave as
    StorageFailureError; validation and business-rule errors pass through
    unchanged.

Architecture position:
    Kernel > Services.  Both CredentialStore and InventoryStore extend this
    class.  The stores never share a transaction with each other.

Failure modes:
    - StorageFailureError wrapping any ``sqlalchemy.exc.SQLAlchemyError``
      raised while the scope is open.  Persisted state is unchanged when it
      is raised.
"""

from abc import ABC
from contextlib import contextmanager
from typing import Generator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from stock_kernel.db.engine import session_scope
from stock_kernel.domain.config import StoreConfig
from stock_kernel.exceptions import StorageFailureError
from stock_kernel.logging_config import LogContext, get_logger

logger = get_logger("services.base")


class BaseStore(ABC):
    """
    Abstract base class for the kernel stores.

    Guarantees:
        - Each call to ``_transaction`` opens and closes its own session.
        - No store keeps mutable state between calls; instances may be
          shared across threads.
    """

    def __init__(self, session_factory: sessionmaker[Session], config: StoreConfig):
        """
        Args:
            session_factory: Factory bound to the store's engine.
            config: Validation bounds.  Required; the kernel has no defaults.
        """
        if not isinstance(config, StoreConfig):
            raise TypeError(f"config must be StoreConfig, got {type(config).__name__}")
        self.session_factory = session_factory
        self.config = config

    @contextmanager
    def _transaction(self, operation: str) -> Generator[Session, None, None]:
        """Open a commit-or-rollback scope and translate engine faults."""
        with LogContext.bind(operation=operation):
            try:
                with session_scope(self.session_factory) as session:
                    yield session
            except SQLAlchemyError as exc:
                logger.error(
                    "storage_failure",
                    extra={"failed_operation": operation},
                    exc_info=True,
                )
                raise StorageFailureError(operation, type(exc).__name__) from exc
