"""
Resilience utilities for the JSearch client.

Retry with exponential backoff for transient API failures, and a sliding
window rate limiter to stay inside the RapidAPI plan quota.
"""

import time
import random
import functools
import threading
from collections import deque
from typing import Any, Callable, Optional, Tuple, Type

from jobsift.logging_config import get_logger

logger = get_logger(__name__)


class RetryError(Exception):
    """Raised when all retry attempts are exhausted."""

    def __init__(self, message: str, last_exception: Optional[Exception] = None):
        super().__init__(message)
        self.last_exception = last_exception


def retry_with_backoff(
    max_retries: int = 3,
    base_delay: float = 1.0,
    max_delay: float = 30.0,
    exponential_base: float = 2.0,
    jitter: bool = True,
    retryable_exceptions: Tuple[Type[Exception], ...] = (Exception,),
    sleep: Callable[[float], None] = time.sleep,
):
    """
    Decorator for retry with exponential backoff.

    Args:
        max_retries: Maximum number of retry attempts after the first call
        base_delay: Initial delay in seconds
        max_delay: Maximum delay cap in seconds
        exponential_base: Base for exponential calculation
        jitter: Spread each delay by +/-25%
        retryable_exceptions: Exceptions that trigger a retry; others propagate
        sleep: Sleep function (tests pass a no-op)

    Usage:
        @retry_with_backoff(max_retries=3, retryable_exceptions=(TransientAPIError,))
        def fetch_page():
            ...
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            for attempt in range(max_retries + 1):
                try:
                    return func(*args, **kwargs)
                except retryable_exceptions as e:
                    if attempt == max_retries:
                        logger.error(f"All {max_retries} retries exhausted for {func.__name__}: {e}")
                        raise RetryError(f"Failed after {max_retries} retries: {e}", last_exception=e)

                    delay = min(base_delay * (exponential_base ** attempt), max_delay)
                    if jitter:
                        delay = delay * (0.75 + random.random() * 0.5)

                    logger.warning(
                        f"Retry {attempt + 1}/{max_retries} for {func.__name__} "
                        f"after {delay:.2f}s delay. Error: {e}"
                    )
                    sleep(delay)

            raise RetryError(f"Failed after {max_retries} retries")

        return wrapper

    return decorator


class RateLimiter:
    """
    Sliding window rate limiter.

    Allows at most `calls_per_minute` calls in any 60 second window and keeps
    at least 60 / calls_per_minute seconds between consecutive calls.
    """

    def __init__(self, calls_per_minute: int = 30, clock: Callable[[], float] = time.monotonic):
        """
        Args:
            calls_per_minute: Maximum calls allowed per minute
            clock: Monotonic clock (injectable for tests)
        """
        self.calls_per_minute = max(1, calls_per_minute)
        self.min_interval = 60.0 / self.calls_per_minute
        self._clock = clock
        self._lock = threading.Lock()
        self._call_times: deque = deque(maxlen=self.calls_per_minute)
        self._last_call: Optional[float] = None

    def _wait_time(self, now: float) -> float:
        while self._call_times and self._call_times[0] <= now - 60:
            self._call_times.popleft()

        wait_for_window = 0.0
        if len(self._call_times) >= self.calls_per_minute:
            wait_for_window = self._call_times[0] + 60 - now

        wait_for_interval = 0.0
        if self._last_call is not None:
            wait_for_interval = self._last_call + self.min_interval - now

        return max(0.0, wait_for_window, wait_for_interval)

    def acquire(self, timeout: Optional[float] = None) -> bool:
        """
        Acquire permission to make a call, blocking if necessary.

        Args:
            timeout: Maximum time to wait in seconds (None waits indefinitely)

        Returns:
            True if acquired, False if the wait would exceed the timeout
        """
        start = self._clock()

        while True:
            with self._lock:
                now = self._clock()
                wait_time = self._wait_time(now)
                if wait_time <= 0:
                    self._call_times.append(now)
                    self._last_call = now
                    return True

            if timeout is not None and (now - start) + wait_time > timeout:
                logger.warning(f"Rate limiter timed out after {now - start:.2f}s")
                return False

            time.sleep(min(wait_time, 0.1))


def resilient_call(
    func: Callable,
    *args,
    max_retries: int = 3,
    base_delay: float = 1.0,
    retryable_exceptions: Tuple[Type[Exception], ...] = (Exception,),
    rate_limiter: Optional[RateLimiter] = None,
    sleep: Callable[[float], None] = time.sleep,
    **kwargs,
) -> Any:
    """
    Call `func` with rate limiting and retry.

    Each attempt, retries included, acquires the rate limiter first.

    Raises:
        RetryError: When every attempt failed with a retryable exception
    """

    @retry_with_backoff(
        max_retries=max_retries,
        base_delay=base_delay,
        retryable_exceptions=retryable_exceptions,
        sleep=sleep,
    )
    def _call():
        if rate_limiter:
            rate_limiter.acquire()
        return func(*args, **kwargs)

    return _call()
