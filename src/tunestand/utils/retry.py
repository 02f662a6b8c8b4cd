"""
Retry with exponential backoff for catalog reads.

Only transient failures are retried. A missing row or a rejected sign-in will
not succeed on the next attempt, and play-count updates are never retried.
"""

import time
import random
from typing import Callable, TypeVar, Optional, Tuple, Type
from functools import wraps
from ..core.exceptions import TunestandError, NetworkError
from ..core.config import API_LIMITS
from ..core.logger import get_logger

T = TypeVar('T')

logger = get_logger("utils.retry")

TRANSIENT_ERRORS: Tuple[Type[BaseException], ...] = (NetworkError, TimeoutError)


class RetryError(TunestandError):
    """Raised when every attempt of a retried catalog read failed."""
    pass


def backoff_delay(attempt: int, backoff_factor: float, jitter: bool = True) -> float:
    """Seconds to wait after the given zero-based failed attempt."""
    delay = backoff_factor * (2 ** attempt)
    if jitter:
        delay += random.uniform(0, delay * 0.1)
    return delay


def retry_with_backoff(
    max_retries: Optional[int] = None,
    backoff_factor: Optional[float] = None,
    exceptions: Optional[tuple] = None,
    jitter: bool = True
):
    """
    Decorator retrying a call on transient catalog failures.

    Args:
        max_retries: Retries after the first attempt (API_LIMITS default)
        backoff_factor: Base delay in seconds, doubled on each retry
        exceptions: Exceptions worth retrying (network errors and timeouts by default)
        jitter: Add up to 10% random delay

    Raises:
        RetryError: From the last failure, once all attempts are used
    """
    max_retries = API_LIMITS["MAX_RETRIES"] if max_retries is None else max_retries
    backoff_factor = backoff_factor or API_LIMITS["BACKOFF_FACTOR"]
    exceptions = exceptions or TRANSIENT_ERRORS
    attempts = max_retries + 1

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args, **kwargs) -> T:
            for attempt in range(attempts):
                try:
                    return func(*args, **kwargs)
                except exceptions as e:
                    if attempt == max_retries:
                        raise RetryError(
                            f"Function {func.__name__} failed after {attempts} attempts: {e}"
                        ) from e
                    delay = backoff_delay(attempt, backoff_factor, jitter)
                    logger.debug(
                        f"{func.__name__} failed ({e}); retry {attempt + 1}/{max_retries} in {delay:.2f}s"
                    )
                    time.sleep(delay)

        return wrapper
    return decorator
