"""Database layer - engine, session scope, declarative base."""

from stock_kernel.db.base import Base
from stock_kernel.db.engine import (
    create_tables,
    get_engine,
    get_session,
    get_session_factory,
    session_scope,
)

__all__ = [
    "Base",
    "create_tables",
    "get_engine",
    "get_session",
    "get_session_factory",
    "session_scope",
]
