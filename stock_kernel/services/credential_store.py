"""
CredentialStore -- user registration and authentication.

Responsibility:
    Owns UserAccount rows.  Enforces the username and password policy from
    StoreConfig, stores a salted SHA-256 digest instead of the password, and
    rejects usernames that collide after normalization (trim + lower case).

Architecture position:
    Kernel > Services.  Peer of InventoryStore; the two share nothing but
    the account id, which callers pass on as the inventory owner id.

Invariants enforced:
    - Validation and the duplicate pre-check run before any write.
    - A fresh salt is generated for every registration.
    - authenticate() collapses "unknown user" and "wrong password" into a
      single AuthFailureError.  Both branches run one digest and one
      constant-time comparison.

Failure modes:
    - InvalidInputError: malformed username or password (no storage access).
    - DuplicateUsernameError: normalized username already registered.
    - AuthFailureError: credentials did not match.
    - StorageFailureError: engine fault; nothing was persisted.

Lockout and minimum-latency padding are caller policies and live in
``stock_services``.
"""

from sqlalchemy import func, select
from sqlalchemy.orm import Session, sessionmaker

from stock_kernel.domain.clock import Clock, SystemClock
from stock_kernel.domain.config import StoreConfig
from stock_kernel.domain.validation import validate_password, validate_username
from stock_kernel.exceptions import AuthFailureError, DuplicateUsernameError
from stock_kernel.logging_config import get_logger
from stock_kernel.models.account import UserAccount
from stock_kernel.services.base import BaseStore
from stock_kernel.utils.hashing import generate_salt, hash_password, verify_password

logger = get_logger("services.credentials")


class CredentialStore(BaseStore):
    """Registers and authenticates accounts."""

    def __init__(
        self,
        session_factory: sessionmaker[Session],
        config: StoreConfig,
        clock: Clock | None = None,
    ):
        super().__init__(session_factory, config)
        self._clock = clock or SystemClock()
        # Compared against when the username is unknown
        self._absent_salt = generate_salt()
        self._absent_hash = hash_password(generate_salt(), self._absent_salt)

    def register_user(self, username: str, password: str) -> int:
        """
        Create an account and return its id.

        Raises:
            InvalidInputError: username or password fails policy.
            DuplicateUsernameError: normalized username is taken.
            StorageFailureError: the insert did not commit.
        """
        normalized = validate_username(username, self.config)
        validate_password(password, self.config)

        if self._find_account_id(normalized, "register_user") is not None:
            logger.info("registration_rejected", extra={"username": normalized})
            raise DuplicateUsernameError(normalized)

        salt = generate_salt()
        account = UserAccount(
            username=normalized,
            password_hash=hash_password(password, salt),
            salt=salt,
            created_at=self._clock.epoch_seconds(),
        )
        with self._transaction("register_user") as session:
            session.add(account)
            session.flush()
            account_id = account.id

        logger.info(
            "user_registered",
            extra={"account_id": account_id, "username": normalized},
        )
        return account_id

    def authenticate(self, username: str, password: str) -> int:
        """
        Verify credentials and return the account id.

        Raises:
            InvalidInputError: malformed input, rejected before any lookup.
            AuthFailureError: unknown username or wrong password.
            StorageFailureError: the lookup failed.
        """
        normalized = validate_username(username, self.config)
        validate_password(password, self.config)

        with self._transaction("authenticate") as session:
            row = session.execute(
                select(UserAccount.id, UserAccount.password_hash, UserAccount.salt)
                .where(UserAccount.username == normalized)
            ).one_or_none()

        if row is None:
            account_id, stored_hash, salt = None, self._absent_hash, self._absent_salt
        else:
            account_id, stored_hash, salt = row

        matched = verify_password(password, salt, stored_hash)
        if account_id is None or not matched:
            logger.info("authentication_failed", extra={"username": normalized})
            raise AuthFailureError()

        logger.info("authentication_succeeded", extra={"account_id": account_id})
        return account_id

    def username_exists(self, username: str) -> bool:
        """
        Whether the normalized username is registered.

        Raises:
            InvalidInputError: malformed username.
            StorageFailureError: the lookup failed (caller picks a fallback).
        """
        normalized = validate_username(username, self.config)
        return self._find_account_id(normalized, "username_exists") is not None

    def account_id_for(self, username: str) -> int | None:
        """Id of the account with this username, or None."""
        normalized = validate_username(username, self.config)
        return self._find_account_id(normalized, "account_id_for")

    def account_count(self) -> int:
        """Number of registered accounts."""
        with self._transaction("account_count") as session:
            return session.execute(
                select(func.count()).select_from(UserAccount)
            ).scalar_one()

    def _find_account_id(self, normalized: str, operation: str) -> int | None:
        with self._transaction(operation) as session:
            return session.execute(
                select(UserAccount.id).where(UserAccount.username == normalized)
            ).scalar_one_or_none()
