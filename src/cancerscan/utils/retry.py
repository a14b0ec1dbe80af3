"""Bounded retry with a fixed delay between attempts."""
from __future__ import annotations

import time
from typing import Callable, Optional, TypeVar

from .logger import get_logger

T = TypeVar("T")

logger = get_logger(__name__)


class RetryError(Exception):
    """Raised once every attempt has failed; wraps the last failure."""

    def __init__(self, attempts: int, last_error: BaseException) -> None:
        super().__init__(f"Gave up after {attempts} attempt(s): {last_error}")
        self.attempts = attempts
        self.last_error = last_error


def retry_with_delay(
    func: Callable[[], T],
    *,
    attempts: int = 3,
    delay: float = 5.0,
    sleep: Callable[[float], None] = time.sleep,
    on_attempt: Optional[Callable[[int], None]] = None,
) -> T:
    """Call ``func`` until it succeeds or ``attempts`` calls have failed.

    ``delay`` seconds are slept between consecutive attempts, never after the
    last one. Any ``Exception`` counts as a failure.
    """
    if attempts < 1:
        raise ValueError("attempts must be at least 1")

    attempt = 0
    while True:
        attempt += 1
        if on_attempt is not None:
            on_attempt(attempt)
        try:
            return func()
        except Exception as exc:
            logger.error(f"Attempt {attempt} failed: {exc}")
            if attempt >= attempts:
                raise RetryError(attempts, exc) from exc
        sleep(delay)
