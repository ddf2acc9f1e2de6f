"""
StoreConfig -- tunable bounds supplied by the calling layer.

Responsibility:
    Carries every length, range and lockout bound the stores enforce.  The
    kernel assumes no defaults: all fields are required at construction.
    Loading from YAML lives in ``stock_config``; the kernel only consumes
    the frozen value.

Failure modes:
    - ValueError from ``__post_init__`` when the bounds are inconsistent.
"""

from dataclasses import asdict, dataclass, fields
from typing import Any


@dataclass(frozen=True)
class StoreConfig:
    """Validation and lockout bounds for the credential and inventory stores."""

    min_username_length: int
    max_username_length: int
    min_password_length: int
    max_password_length: int
    max_item_name_length: int
    min_quantity: int
    max_quantity: int
    max_owner_id_length: int
    max_login_attempts: int
    lockout_duration_ms: int

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{f.name} must be an integer, got {value!r}")

        self._require_range("username length", self.min_username_length, self.max_username_length)
        self._require_range("password length", self.min_password_length, self.max_password_length)
        if self.min_username_length < 1:
            raise ValueError("min_username_length must be at least 1")
        if self.min_password_length < 1:
            raise ValueError("min_password_length must be at least 1")
        if self.max_item_name_length < 1:
            raise ValueError("max_item_name_length must be at least 1")
        if self.max_owner_id_length < 1:
            raise ValueError("max_owner_id_length must be at least 1")
        if self.min_quantity < 0:
            raise ValueError("min_quantity must not be negative")
        self._require_range("quantity", self.min_quantity, self.max_quantity)
        if self.max_login_attempts < 1:
            raise ValueError("max_login_attempts must be at least 1")
        if self.lockout_duration_ms < 0:
            raise ValueError("lockout_duration_ms must not be negative")

    @staticmethod
    def _require_range(label: str, low: int, high: int) -> None:
        if low > high:
            raise ValueError(f"{label}: minimum {low} exceeds maximum {high}")

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls))
