"""
Hashing utilities.

Password storage uses a per-account random salt mixed into a SHA-256
digest: ``hex(SHA-256(utf8(salt_hex) || utf8(password)))``.  Both the salt
and the digest are stored as 64-character lowercase hex strings.

Config identity uses a SHA-256 over canonical JSON so the same settings
always produce the same checksum.
"""

import hashlib
import hmac
import json
import secrets
from typing import Any

HASH_ALGORITHM = "sha256"
SALT_BYTES = 32  # 256 bits
DIGEST_HEX_LENGTH = 64


def generate_salt() -> str:
    """Fresh cryptographically random salt, hex-encoded."""
    return secrets.token_hex(SALT_BYTES)


def hash_password(password: str, salt: str) -> str:
    """
    Digest of salt || password.

    Args:
        password: Plaintext password (never stored or logged).
        salt: Hex salt from generate_salt().

    Returns:
        Hex-encoded SHA-256 digest (64 characters).
    """
    digest = hashlib.new(HASH_ALGORITHM)
    digest.update(salt.encode("utf-8"))
    digest.update(password.encode("utf-8"))
    return digest.hexdigest()


def verify_password(password: str, salt: str, expected_hash: str) -> bool:
    """Recompute the digest and compare without an early exit."""
    candidate = hash_password(password, salt)
    return hmac.compare_digest(candidate.encode("ascii"), expected_hash.encode("ascii"))


def canonicalize_json(data: dict | list | Any) -> str:
    """
    Convert data to canonical JSON string.

    Keys are sorted and no whitespace is emitted.
    """
    return json.dumps(data, sort_keys=True, separators=(",", ":"))


def hash_payload(payload: dict) -> str:
    """
    Compute SHA-256 hash of a payload.

    Returns:
        Hex-encoded SHA-256 hash (64 characters).
    """
    canonical = canonicalize_json(payload)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()
