"""
Field validation rules shared by both stores.

Every check runs before any storage access and raises InvalidInputError
naming the offending field.  Normalizers return the value in the form that
is persisted or used as a lookup key.
"""

import re

from stock_kernel.domain.config import StoreConfig
from stock_kernel.exceptions import InvalidInputError

USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_]+$")


def normalize_username(username: str) -> str:
    """Lookup/storage key for a username: trimmed and lower-cased."""
    return username.strip().lower()


def validate_username(username: str | None, config: StoreConfig) -> str:
    """
    Check a raw username and return its normalized form.

    Raises:
        InvalidInputError: empty after trimming, trimmed length outside
            the configured bounds, or characters other than letters,
            digits and underscore.
    """
    if username is None or not isinstance(username, str) or not username.strip():
        raise InvalidInputError("username", "Username cannot be empty")

    trimmed = username.strip()
    if not config.min_username_length <= len(trimmed) <= config.max_username_length:
        raise InvalidInputError(
            "username",
            f"Username must be {config.min_username_length}-"
            f"{config.max_username_length} characters",
        )
    if not USERNAME_PATTERN.fullmatch(trimmed):
        raise InvalidInputError(
            "username",
            "Username can only contain letters, numbers, and underscores",
        )
    return trimmed.lower()


def validate_password(password: str | None, config: StoreConfig) -> str:
    """
    Check a raw password.  Passwords are not trimmed.

    Raises:
        InvalidInputError: empty or length outside the configured bounds.
    """
    if password is None or not isinstance(password, str) or password == "":
        raise InvalidInputError("password", "Password cannot be empty")
    if not config.min_password_length <= len(password) <= config.max_password_length:
        raise InvalidInputError(
            "password",
            f"Password must be {config.min_password_length}-"
            f"{config.max_password_length} characters",
        )
    return password


def validate_item_name(name: str | None, config: StoreConfig) -> str:
    """Return the trimmed item name."""
    if name is None or not isinstance(name, str) or not name.strip():
        raise InvalidInputError("name", "Item name cannot be empty")
    trimmed = name.strip()
    if len(trimmed) > config.max_item_name_length:
        raise InvalidInputError(
            "name",
            f"Item name cannot exceed {config.max_item_name_length} characters",
        )
    return trimmed


def validate_quantity(quantity: int, config: StoreConfig) -> int:
    # bool is an int subclass; True is not a quantity
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise InvalidInputError("quantity", f"Quantity must be an integer, got {quantity!r}")
    if not config.min_quantity <= quantity <= config.max_quantity:
        raise InvalidInputError(
            "quantity",
            f"Quantity must be between {config.min_quantity} and {config.max_quantity}",
        )
    return quantity


def validate_owner_id(owner_id: str | None, config: StoreConfig) -> str:
    """Return the trimmed owner id."""
    if owner_id is None or not isinstance(owner_id, str) or not owner_id.strip():
        raise InvalidInputError("owner_id", "Owner ID cannot be empty")
    trimmed = owner_id.strip()
    if len(trimmed) > config.max_owner_id_length:
        raise InvalidInputError(
            "owner_id",
            f"Owner ID cannot exceed {config.max_owner_id_length} characters",
        )
    return trimmed


def validate_item_id(item_id: int) -> int:
    """Persisted item ids are positive integers."""
    if isinstance(item_id, bool) or not isinstance(item_id, int) or item_id <= 0:
        raise InvalidInputError("id", "Item ID must be positive")
    return item_id
