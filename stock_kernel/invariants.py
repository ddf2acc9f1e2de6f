"""
Kernel Invariants Contract.

These invariants are structural. No StoreConfig value can switch them off;
configuration only moves the bounds that validation checks against.

Enforcement is distributed across the validation rules, the two stores and
the table constraints in stock_kernel.models.
"""

from enum import Enum, unique


@unique
class StoreInvariant(str, Enum):
    """Non-configurable guarantees provided by the kernel stores."""

    UNIQUE_USERNAME = "unique_username"
    """Usernames are unique after trim + lower-case normalization.
    Enforced by CredentialStore's pre-check and the users unique index."""

    SALTED_DIGEST = "salted_digest"
    """Only a salted digest is stored; every account gets a fresh salt.
    Enforced by CredentialStore.register_user and the users CHECKs."""

    NO_ENUMERATION = "no_enumeration"
    """Unknown user and wrong password are the same AuthFailureError.
    Enforced by CredentialStore.authenticate."""

    VALIDATE_BEFORE_IO = "validate_before_io"
    """InvalidInputError and DuplicateUsernameError precede any write."""

    ATOMIC_MUTATION = "atomic_mutation"
    """Every write commits fully or rolls back. Enforced by
    BaseStore._transaction / db.engine.session_scope."""

    OWNER_ISOLATION = "owner_isolation"
    """update_item matches on (id, owner_id); owner_id never changes.
    Enforced by InventoryStore."""


ALL_STORE_INVARIANTS: frozenset[StoreInvariant] = frozenset(StoreInvariant)

# The kernel package may not import from these packages.
# This is enforced by tests/architecture/test_kernel_boundary.py.
FORBIDDEN_KERNEL_IMPORTS: tuple[str, ...] = (
    "stock_config",
    "stock_services",
)
