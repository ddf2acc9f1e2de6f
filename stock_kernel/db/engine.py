"""
Module: stock_kernel.db.engine
Responsibility: where the kernel gets its SQLite connections.  Builds
    engines, keeps the process-wide engine and session factory, and provides
    the commit-or-rollback scope every store transaction runs in.
Architecture position: Kernel > DB.  May import from db/base.py.
    MUST NOT import from services/ or domain/ (create_tables imports models
    so that Base.metadata is populated).

Invariants enforced:
    - Every mutating store operation runs inside session_scope(): the session
      is committed on normal exit and rolled back on any exception, so no
      partial effect is ever visible.
    - File-backed SQLite serializes writers itself; a busy timeout is
      configured on every connection.  The single in-memory connection is
      owned by one checkout at a time (checkout/checkin lock).

Failure modes:
    - RuntimeError if get_engine/get_session/get_session_factory is called
      before init_engine_from_url().
"""

import atexit
import threading
from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from stock_kernel.logging_config import configure_logging, get_logger

logger = get_logger("db.engine")

# Module-level engine and session factory
_engine: Engine | None = None
_SessionFactory: sessionmaker[Session] | None = None

SQLITE_BUSY_TIMEOUT_MS = 5000


def _is_memory_url(database_url: str) -> bool:
    return database_url in ("sqlite://", "sqlite:///:memory:") or "mode=memory" in database_url


def init_engine_from_url(database_url: str, echo: bool = False) -> Engine:
    """
    Initialize the SQLAlchemy engine from a SQLite database URL.

    Sets the module-level engine and session factory.  A second call
    replaces the first.

    Args:
        database_url: e.g. ``sqlite:///stockshark.db`` or ``sqlite://``.
        echo: If True, log all SQL statements.

    Returns:
        SQLAlchemy Engine instance.
    """
    global _engine, _SessionFactory

    _engine = build_engine(database_url, echo=echo)
    _SessionFactory = sessionmaker(bind=_engine, expire_on_commit=False)

    configure_logging()
    logger.info(
        "engine_initialized",
        extra={
            "dialect": _engine.dialect.name,
            "in_memory": _is_memory_url(database_url),
            "echo": echo,
        },
    )

    return _engine


def build_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Create a standalone engine without touching module-level state.

    In-memory databases live in a single connection (StaticPool).  A lock is
    held from pool checkout to checkin, so one session at a time owns that
    connection and transactions from different threads never interleave.
    File databases get a normal pool and rely on SQLite locking plus the
    busy timeout.  Bound parameters (digests, salts) are kept out of
    SQLAlchemy error messages.
    """
    kwargs: dict = {"echo": echo, "hide_parameters": True}
    if database_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if _is_memory_url(database_url):
            kwargs["poolclass"] = StaticPool

    engine = create_engine(database_url, **kwargs)

    if isinstance(engine.pool, StaticPool):
        _serialize_checkouts(engine)

    if engine.dialect.name == "sqlite":
        @event.listens_for(engine, "connect")
        def _set_sqlite_pragmas(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute(f"PRAGMA busy_timeout = {SQLITE_BUSY_TIMEOUT_MS}")
            cursor.close()

    return engine


def _serialize_checkouts(engine: Engine) -> None:
    """Allow one checkout of the shared connection at a time."""
    owner = threading.RLock()

    @event.listens_for(engine, "checkout")
    def _acquire(dbapi_connection, connection_record, connection_proxy):
        owner.acquire()

    @event.listens_for(engine, "checkin")
    def _release(dbapi_connection, connection_record):
        owner.release()


def _not_initialized() -> RuntimeError:
    return RuntimeError("Engine not initialized. Call init_engine_from_url() first.")


def get_engine() -> Engine:
    """The engine set up by init_engine_from_url().  RuntimeError before that."""
    if _engine is None:
        raise _not_initialized()
    return _engine


def get_session() -> Session:
    """A new, unmanaged session.  Prefer session_scope() for writes."""
    return get_session_factory()()


def get_session_factory() -> sessionmaker[Session]:
    """
    The factory CredentialStore and InventoryStore are constructed with.

    Raises:
        RuntimeError: init_engine_from_url() has not run.
    """
    if _SessionFactory is None:
        raise _not_initialized()
    return _SessionFactory


@contextmanager
def session_scope(
    factory: sessionmaker[Session] | None = None,
) -> Generator[Session, None, None]:
    """
    One unit of work: commit on success, roll back on error.

    The session is closed either way and the exception is re-raised.

    Args:
        factory: Session factory to use.  Defaults to the module-level one.

    Usage:
        with session_scope(factory) as session:
            session.add(entity)
            # Commits on successful exit, rolls back on exception
    """
    session = factory() if factory is not None else get_session()
    logger.debug("transaction_started")
    try:
        yield session
        session.commit()
        logger.debug("transaction_committed")
    except Exception:
        session.rollback()
        logger.warning("transaction_rolled_back", exc_info=True)
        raise
    finally:
        session.close()


def create_tables(engine: Engine | None = None) -> None:
    """
    Create the users and items tables (and their indexes) if missing.

    Args:
        engine: Target engine.  Defaults to the module-level engine.
    """
    from stock_kernel.db.base import Base
    import stock_kernel.models  # noqa: F401  (registers tables on Base.metadata)

    Base.metadata.create_all(engine or get_engine())


def drop_tables(engine: Engine | None = None) -> None:
    """
    Drop the users and items tables.  Tests use this to simulate a
    storage fault.
    """
    from stock_kernel.db.base import Base
    import stock_kernel.models  # noqa: F401

    Base.metadata.drop_all(engine or get_engine())


def reset_engine() -> None:
    """
    Dispose the module-level engine and forget the session factory.
    """
    global _engine, _SessionFactory

    if _engine is not None:
        _engine.dispose()
        _engine = None

    _SessionFactory = None


def _atexit_dispose():
    """Close pooled SQLite connections at interpreter exit."""
    if _engine is not None:
        _engine.dispose()


atexit.register(_atexit_dispose)
