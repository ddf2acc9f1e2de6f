"""
stock_services -- caller-side policies over the kernel stores.

Responsibility:
    Everything the kernel deliberately leaves to its caller: login lockout
    counters, off-thread latency-padded authentication, optimistic quantity
    edits with revert, and low-stock alert composition.

Dependency direction (enforced by tests/architecture/test_kernel_boundary.py):
    stock_services/ -> stock_kernel/  (allowed)
    stock_kernel/   -> stock_services/ (FORBIDDEN)
"""

from stock_services.alerts import LowStockNotifier, compose_low_stock_alert
from stock_services.lockout import LoginAttempts, LoginLockedError
from stock_services.login_flow import AuthResult, LoginFlow, check_password_strength
from stock_services.quantity_editor import EditOutcome, QuantityEditor

__all__ = [
    "AuthResult",
    "EditOutcome",
    "LoginAttempts",
    "LoginFlow",
    "LoginLockedError",
    "LowStockNotifier",
    "QuantityEditor",
    "check_password_strength",
    "compose_low_stock_alert",
]
