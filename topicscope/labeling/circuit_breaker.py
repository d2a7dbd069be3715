"""Fail-fast guard for text-generation backends.

A labeling run asks the backend for one label per topic. If the backend is
down, each of those requests would wait out its own timeout. The breaker
counts consecutive failures and, once ``failure_threshold`` is reached,
rejects calls until ``recovery_timeout`` seconds have passed. The remaining
topics then drop straight to term-based labels.

After the timeout one trial call is let through: success closes the
breaker, failure re-opens it for another full timeout.
"""

import enum
import logging
import time
from typing import Any, Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CircuitState(enum.Enum):
    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"


class CircuitOpenError(Exception):
    """Raised instead of calling a backend whose breaker is open."""


class CircuitBreaker:
    """Consecutive-failure breaker around a synchronous backend call.

    Args:
        failure_threshold: Consecutive failures that open the breaker.
        recovery_timeout: Seconds an open breaker waits before a trial call.
        name: Backend name used in log lines.
    """

    def __init__(
        self,
        failure_threshold: int = 3,
        recovery_timeout: float = 60.0,
        name: str = "generator",
    ) -> None:
        self._failure_threshold = failure_threshold
        self._recovery_timeout = recovery_timeout
        self._name = name
        self._consecutive_failures = 0
        self._opened_at: float | None = None

    @property
    def state(self) -> CircuitState:
        if self._opened_at is None:
            return CircuitState.CLOSED
        if time.monotonic() - self._opened_at >= self._recovery_timeout:
            return CircuitState.HALF_OPEN
        return CircuitState.OPEN

    @property
    def consecutive_failures(self) -> int:
        return self._consecutive_failures

    def call(self, fn: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """Run ``fn(*args, **kwargs)`` unless the breaker is open.

        Raises:
            CircuitOpenError: If the breaker is open and still cooling down.
            Exception: Whatever ``fn`` raises; the failure is counted first.
        """
        state = self.state
        if state == CircuitState.OPEN:
            raise CircuitOpenError(
                f"{self._name} backend unavailable after "
                f"{self._consecutive_failures} consecutive failures"
            )

        try:
            result = fn(*args, **kwargs)
        except Exception:
            self._consecutive_failures += 1
            if state == CircuitState.HALF_OPEN or (
                self._consecutive_failures >= self._failure_threshold
            ):
                self._open(trial=state == CircuitState.HALF_OPEN)
            raise

        if self._opened_at is not None:
            logger.info("%s backend recovered, resuming LLM labels", self._name)
        self._opened_at = None
        self._consecutive_failures = 0
        return result

    def _open(self, trial: bool) -> None:
        self._opened_at = time.monotonic()
        if trial:
            logger.warning(
                "%s backend still failing, pausing LLM labels for %.0fs",
                self._name,
                self._recovery_timeout,
            )
        else:
            logger.warning(
                "%s backend failed %d times in a row, pausing LLM labels for %.0fs",
                self._name,
                self._consecutive_failures,
                self._recovery_timeout,
            )
