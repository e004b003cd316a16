import time
from typing import Callable, Optional, Tuple, TypeVar

T = TypeVar("T")


def retry_with_backoff(
    operation: Callable[[], T],
    *,
    attempts: int = 3,
    delay: float = 1.5,
    backoff: float = 1.5,
    exceptions: Tuple[type, ...] = (Exception,),
    should_retry: Optional[Callable[[BaseException], bool]] = None,
    on_retry: Optional[Callable[[int, BaseException], None]] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """Execute `operation` with simple exponential backoff.

    `should_retry` can veto a retry for a given exception (it is re-raised
    immediately); `on_retry` is called with the 1-based attempt number
    before sleeping.
    """
    if attempts < 1:
        raise ValueError("attempts must be >= 1")
    last_exc: Exception | None = None
    for attempt in range(attempts):
        try:
            return operation()
        except exceptions as exc:  # type: ignore[arg-type]
            last_exc = exc
            if attempt == attempts - 1:
                raise
            if should_retry is not None and not should_retry(exc):
                raise
            if on_retry is not None:
                on_retry(attempt + 1, exc)
            sleep(delay)
            delay *= backoff
    assert last_exc is not None
    raise last_exc
