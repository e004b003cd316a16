import time
from enum import Enum
from typing import Callable, Optional

from src.shared.logging_utils import info as log_info, warning as log_warning


class CircuitState(str, Enum):
    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"


class CircuitBreaker:
    """Closed -> Open -> Half-Open breaker counting consecutive failed calls.

    Opens after `threshold` consecutive failures. Once `reset_timeout`
    seconds have passed it lets a trial call through (half-open); a success
    closes it again, a failure re-opens it for another cool-down.
    """

    def __init__(
        self,
        threshold: int = 5,
        reset_timeout: float = 60.0,
        *,
        name: str = "default",
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if threshold < 1:
            raise ValueError("threshold must be >= 1")
        self.threshold = threshold
        self.reset_timeout = reset_timeout
        self.name = name
        self._clock = clock
        self._state = CircuitState.CLOSED
        self._failures = 0
        self._opened_at: Optional[float] = None

    @property
    def state(self) -> CircuitState:
        if self._state is CircuitState.OPEN and self._cooled_down():
            self._state = CircuitState.HALF_OPEN
            log_info(None, "circuit:half_open", breaker=self.name)
        return self._state

    @property
    def failure_count(self) -> int:
        return self._failures

    def _cooled_down(self) -> bool:
        return self._opened_at is not None and self._clock() - self._opened_at >= self.reset_timeout

    def allow_request(self) -> bool:
        return self.state is not CircuitState.OPEN

    def record_success(self) -> None:
        if self._state is not CircuitState.CLOSED:
            log_info(None, "circuit:closed", breaker=self.name)
        self._state = CircuitState.CLOSED
        self._failures = 0
        self._opened_at = None

    def record_failure(self) -> None:
        self._failures += 1
        if self.state is CircuitState.HALF_OPEN or self._failures >= self.threshold:
            self._trip()

    def _trip(self) -> None:
        self._state = CircuitState.OPEN
        self._opened_at = self._clock()
        log_warning(None, "circuit:open", breaker=self.name, failures=self._failures)
