"""
Typed Exception Hierarchy for the Stock Kernel.

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

All exceptions inherit from StockKernelError:

    StockKernelError (base)
    |
    +-- InvalidInputError
    |
    +-- CredentialError
    |   +-- DuplicateUsernameError
    |   +-- AuthFailureError
    |
    +-- StorageFailureError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category        | Code                | When Raised
----------------|---------------------|-------------------------------------------
Input           | INVALID_INPUT       | Field fails validation (before any I/O)
----------------|---------------------|-------------------------------------------
Credential      | DUPLICATE_USERNAME  | Normalized username already registered
                | AUTH_FAILURE        | Unknown user OR wrong password (collapsed)
----------------|---------------------|-------------------------------------------
Storage         | STORAGE_FAILURE     | Engine fault; transaction was rolled back

===============================================================================
HANDLING PATTERNS
===============================================================================

    try:
        account_id = credentials.authenticate(username, password)
    except InvalidInputError as e:
        show_field_error(e.field, e.reason)
    except AuthFailureError:
        show_message("Invalid username or password")
    except StorageFailureError as e:
        log.error("store unavailable", extra={"operation": e.operation})

InvalidInputError and DuplicateUsernameError are always raised before a write
is attempted. StorageFailureError is the only error that can occur after
validation passes, and persisted state is unchanged when it is raised.
Nothing in the kernel retries.
"""


class StockKernelError(Exception):
    """
    Base exception for all stock kernel errors.

    All subclasses carry a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "STOCK_KERNEL_ERROR"


class InvalidInputError(StockKernelError):
    """A caller-supplied value failed validation."""

    code: str = "INVALID_INPUT"

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid {field}: {reason}")


# Credential exceptions


class CredentialError(StockKernelError):
    """Base exception for credential store business-rule failures."""

    code: str = "CREDENTIAL_ERROR"


class DuplicateUsernameError(CredentialError):
    """The normalized username is already registered."""

    code: str = "DUPLICATE_USERNAME"

    def __init__(self, username: str):
        self.username = username
        super().__init__(f"Username already exists: {username}")


class AuthFailureError(CredentialError):
    """
    Credentials did not match.

    Raised identically for an unknown username and a wrong password, so the
    exception carries no detail that would reveal which one occurred.
    """

    code: str = "AUTH_FAILURE"

    def __init__(self):
        super().__init__("Invalid username or password")


# Storage exceptions


class StorageFailureError(StockKernelError):
    """The storage engine failed; the enclosing transaction was rolled back."""

    code: str = "STORAGE_FAILURE"

    def __init__(self, operation: str, detail: str | None = None):
        self.operation = operation
        self.detail = detail
        message = f"Storage failure during {operation}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
