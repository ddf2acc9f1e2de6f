"""
Login lockout bookkeeping owned by the calling layer.

The credential store has no notion of sessions or attempt counters.  A
shell keeps one LoginAttempts per login screen/session and simply stops
calling ``authenticate`` while ``is_locked`` is true.
"""

from dataclasses import dataclass

from stock_kernel.domain.config import StoreConfig
from stock_kernel.exceptions import StockKernelError


class LoginLockedError(StockKernelError):
    """Too many failed attempts; the lockout window has not elapsed."""

    code: str = "LOGIN_LOCKED"

    def __init__(self, retry_after_ms: int):
        self.retry_after_ms = retry_after_ms
        super().__init__(
            f"Too many failed attempts. Try again in {retry_after_ms} ms"
        )


@dataclass
class LoginAttempts:
    """Failed-attempt counter and the time of the most recent failure."""

    attempts: int = 0
    last_failure_ms: int = 0

    def is_locked(self, now_ms: int, config: StoreConfig) -> bool:
        """
        True while the attempt limit is reached and the window is open.

        Once the window has elapsed the counter resets.
        """
        if self.attempts < config.max_login_attempts:
            return False
        if now_ms - self.last_failure_ms < config.lockout_duration_ms:
            return True
        self.reset()
        return False

    def retry_after_ms(self, now_ms: int, config: StoreConfig) -> int:
        if self.attempts < config.max_login_attempts:
            return 0
        return max(0, config.lockout_duration_ms - (now_ms - self.last_failure_ms))

    def record_failure(self, now_ms: int) -> None:
        self.attempts += 1
        self.last_failure_ms = now_ms

    def reset(self) -> None:
        self.attempts = 0
        self.last_failure_ms = 0
