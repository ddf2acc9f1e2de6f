"""
Module: stock_kernel.models.account
Responsibility: ORM persistence for registered user accounts.
Architecture position: Kernel > Models.  May import from db/base.py only.

Invariants enforced:
    - username is unique (uq_users_username + idx_username) and is always
      stored trimmed and lower-cased by CredentialStore.
    - password_hash and salt are present together and non-empty
      (NOT NULL + CHECK constraints).
    - id is AUTOINCREMENT: identifiers are never reused after deletion.

Failure modes:
    - IntegrityError on duplicate username (only reachable when two writers
      race past the duplicate pre-check).
"""

from sqlalchemy import CheckConstraint, Index, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from stock_kernel.db.base import Base


class UserAccount(Base):
    """
    A registered user.

    Never mutated after insert: there is no password-change operation.
    The plaintext password is never stored.
    """

    __tablename__ = "users"

    __table_args__ = (
        UniqueConstraint("username", name="uq_users_username"),
        Index("idx_username", "username", unique=True),
        CheckConstraint("length(password_hash) > 0", name="ck_users_password_hash"),
        CheckConstraint("length(salt) > 0", name="ck_users_salt"),
        {"sqlite_autoincrement": True},
    )

    username: Mapped[str] = mapped_column(nullable=False)

    # Hex SHA-256 of salt || password
    password_hash: Mapped[str] = mapped_column(nullable=False)

    # Hex-encoded random bytes, unique per account
    salt: Mapped[str] = mapped_column(nullable=False)

    # Epoch seconds
    created_at: Mapped[int] = mapped_column(nullable=False)

    def __repr__(self) -> str:
        return f"<UserAccount {self.id} {self.username}>"
