"""Utility functions for the stock kernel."""

from stock_kernel.utils.hashing import (
    generate_salt,
    hash_password,
    hash_payload,
    verify_password,
)

__all__ = [
    "generate_salt",
    "hash_password",
    "hash_payload",
    "verify_password",
]
