"""
Module: stock_kernel.db.base
Responsibility: Declarative base for the kernel's SQLAlchemy ORM models.
Architecture position: Kernel > DB.  Lowest-level import target within the
    kernel.  MUST NOT import from models/, services/ or domain/.

Invariants enforced:
    - Integer primary keys: ``int`` maps to ``Integer`` so that SQLite treats
      the ``id`` column as a rowid alias and ``AUTOINCREMENT`` applies.
      Identifiers are therefore assigned by the store and never reused.
"""

from typing import ClassVar

from sqlalchemy import Integer, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """
    Declarative base for all kernel models.

    Guarantees:
        - ``id`` is an INTEGER PRIMARY KEY assigned by the database.
        - ``str`` columns map to TEXT (no length enforced by the engine;
          length bounds are validated before I/O).
    """

    type_annotation_map: ClassVar[dict] = {
        int: Integer,
        str: Text,
    }

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
