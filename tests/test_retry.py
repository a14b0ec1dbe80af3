"""Tests for the bounded fixed-delay retry helper."""
from __future__ import annotations

import pytest

from cancerscan.utils.retry import RetryError, retry_with_delay


def test_returns_first_success():
    calls = []
    sleeps = []

    def flaky():
        calls.append(1)
        if len(calls) < 3:
            raise ConnectionError("unreachable")
        return "model"

    assert retry_with_delay(flaky, attempts=3, delay=5, sleep=sleeps.append) == "model"
    assert len(calls) == 3
    assert sleeps == [5, 5]


def test_gives_up_after_max_attempts():
    sleeps = []
    attempts_seen = []

    def always_fails():
        raise ValueError("malformed artifact")

    with pytest.raises(RetryError) as excinfo:
        retry_with_delay(
            always_fails,
            attempts=4,
            delay=0.5,
            sleep=sleeps.append,
            on_attempt=attempts_seen.append,
        )
    assert excinfo.value.attempts == 4
    assert isinstance(excinfo.value.last_error, ValueError)
    assert attempts_seen == [1, 2, 3, 4]
    assert sleeps == [0.5, 0.5, 0.5]


def test_single_attempt_never_sleeps():
    sleeps = []
    with pytest.raises(RetryError):
        retry_with_delay(lambda: 1 / 0, attempts=1, delay=10, sleep=sleeps.append)
    assert sleeps == []


def test_rejects_non_positive_attempts():
    with pytest.raises(ValueError):
        retry_with_delay(lambda: None, attempts=0)
