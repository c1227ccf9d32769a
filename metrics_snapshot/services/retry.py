import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple, Type

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_DELAY_SECONDS = 5.0


@dataclass
class RetryResult:
    """Outcome of a bounded retry run."""

    succeeded: bool
    attempts: int
    value: Any = None
    last_error: Optional[BaseException] = None


def retry_call(
    operation: Callable[[], Any],
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    delay_seconds: float = DEFAULT_DELAY_SECONDS,
    retry_on: Tuple[Type[BaseException], ...] = (Exception,),
    sleep: Callable[[float], None] = time.sleep,
    description: str = "operation",
) -> RetryResult:
    """
    Call ``operation`` until it succeeds or ``max_attempts`` is reached.

    A fixed ``delay_seconds`` pause separates attempts; there is no pause
    after the final attempt. Exceptions listed in ``retry_on`` are logged and
    counted as failed attempts, anything else propagates. Exhausting the
    attempts does not raise: the returned RetryResult carries the last error.
    """
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")

    last_error: Optional[BaseException] = None
    for attempt in range(1, max_attempts + 1):
        try:
            value = operation()
        except retry_on as exc:
            last_error = exc
            logger.warning("Attempt %d/%d: %s failed: %s", attempt, max_attempts, description, exc)
            if attempt < max_attempts:
                logger.info("Retrying in %.1f seconds...", delay_seconds)
                sleep(delay_seconds)
        else:
            return RetryResult(succeeded=True, attempts=attempt, value=value)

    return RetryResult(succeeded=False, attempts=max_attempts, last_error=last_error)
