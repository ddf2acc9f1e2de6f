"""
LoginFlow -- caller-side authentication policy.

Responsibility:
    Wraps CredentialStore for an interactive shell:
    - refuses attempts while LoginAttempts reports a lockout,
    - runs the blocking store call on a single background worker,
    - pads every round trip to a minimum latency so fast "unknown user"
      answers look the same as slow "wrong password" answers,
    - hands the outcome back through a Future and an optional callback
      routed via a caller-supplied ``deliver`` function (e.g. a UI loop's
      ``call_soon_threadsafe``).

Architecture position:
    Services -- sits above stock_kernel and holds the session-like state
    (attempt counters) the kernel deliberately does not.

Calls are not cancellable once started; a caller that wants to abandon a
login should not submit it.
"""

import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable

from stock_kernel.domain.clock import Clock, SystemClock
from stock_kernel.domain.config import StoreConfig
from stock_kernel.exceptions import InvalidInputError, StockKernelError
from stock_kernel.logging_config import get_logger
from stock_kernel.services.credential_store import CredentialStore
from stock_services.lockout import LoginAttempts, LoginLockedError

logger = get_logger("services.login")

DEFAULT_MIN_AUTH_LATENCY_MS = 1000


def check_password_strength(password: str) -> None:
    """
    Registration-time strength rule: at least one upper-case letter, one
    lower-case letter and one digit.

    Raises:
        InvalidInputError: the password is too weak.
    """
    has_upper = any(c.isupper() for c in password)
    has_lower = any(c.islower() for c in password)
    has_digit = any(c.isdigit() for c in password)
    if not (has_upper and has_lower and has_digit):
        raise InvalidInputError(
            "password",
            "Password must contain uppercase, lowercase, and a number",
        )


@dataclass(frozen=True)
class AuthResult:
    """Outcome delivered to ``on_result`` callbacks."""

    account_id: int | None
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def from_future(cls, future: Future) -> "AuthResult":
        exc = future.exception()
        if exc is not None:
            return cls(account_id=None, error=exc)
        return cls(account_id=future.result())


class LoginFlow:
    """Lockout-aware, latency-padded front for a CredentialStore."""

    def __init__(
        self,
        store: CredentialStore,
        config: StoreConfig,
        attempts: LoginAttempts | None = None,
        clock: Clock | None = None,
        min_auth_latency_ms: int = DEFAULT_MIN_AUTH_LATENCY_MS,
        timer: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self._store = store
        self._config = config
        self.attempts = attempts if attempts is not None else LoginAttempts()
        self._clock = clock or SystemClock()
        self._min_latency_ms = min_auth_latency_ms
        self._timer = timer
        self._sleep = sleep
        self._lock = threading.Lock()
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="stock-auth")

    # -- synchronous API ----------------------------------------------------

    def login(self, username: str, password: str) -> int:
        """
        Authenticate and return the account id.

        Raises:
            LoginLockedError: lockout window open; the store is not called.
            InvalidInputError, AuthFailureError, StorageFailureError: from
                the store, after padding and recording the failure.
        """
        started = self._timer()
        try:
            account_id = self._attempt(username, password)
        except LoginLockedError:
            raise
        except StockKernelError:
            self._pad(started)
            raise
        self._pad(started)
        return account_id

    def _attempt(self, username: str, password: str) -> int:
        # One attempt at a time: check, store call and bookkeeping share the lock
        with self._lock:
            now_ms = self._clock.epoch_ms()
            if self.attempts.is_locked(now_ms, self._config):
                retry_after = self.attempts.retry_after_ms(now_ms, self._config)
                logger.warning("login_locked", extra={"retry_after_ms": retry_after})
                raise LoginLockedError(retry_after)

            try:
                account_id = self._store.authenticate(username, password)
            except StockKernelError:
                self.attempts.record_failure(self._clock.epoch_ms())
                failures = self.attempts.attempts
                logger.warning("login_failed", extra={"failed_attempts": failures})
                if failures >= self._config.max_login_attempts:
                    logger.warning("login_lockout_started", extra={"failed_attempts": failures})
                raise

            self.attempts.reset()
            return account_id

    def register(self, username: str, password: str) -> int:
        """Strength-check the password, then register with the same padding."""
        check_password_strength(password or "")
        started = self._timer()
        try:
            return self._store.register_user(username, password)
        finally:
            self._pad(started)

    # -- background API -----------------------------------------------------

    def submit(
        self,
        username: str,
        password: str,
        on_result: Callable[[AuthResult], None] | None = None,
        deliver: Callable[[Callable[[], None]], None] | None = None,
    ) -> Future:
        """
        Run ``login`` on the background worker.

        Args:
            on_result: Called once with an AuthResult.
            deliver: Schedules the callback on the originating thread.
                Defaults to calling it directly on the worker.

        Returns:
            Future resolving to the account id or raising the login error.
        """
        future = self._executor.submit(self.login, username, password)
        if on_result is not None:
            dispatch = deliver or (lambda fn: fn())

            def _done(f: Future) -> None:
                result = AuthResult.from_future(f)
                dispatch(lambda: on_result(result))

            future.add_done_callback(_done)
        return future

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> "LoginFlow":
        return self

    def __exit__(self, *exc) -> None:
        self.shutdown()

    def _pad(self, started: float) -> None:
        elapsed_ms = (self._timer() - started) * 1000
        if elapsed_ms < self._min_latency_ms:
            self._sleep((self._min_latency_ms - elapsed_ms) / 1000)
