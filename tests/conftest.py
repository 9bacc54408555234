"""Shared test fixtures for Retro.

Provides a recording sleep and a stub retryable error whose waits are
recorded instead of slept.
"""

from __future__ import annotations

from typing import Callable

import pytest


class RecordingSleep:
    """Stands in for time.sleep; records requested durations."""

    def __init__(self) -> None:
        self.calls: list[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


class StubRetryableError(Exception):
    """Satisfies the Retryable protocol without subclassing RetryableError."""

    def __init__(self, cause: Exception, max_attempts: int, on_wait: Callable[[int], None]) -> None:
        super().__init__(str(cause))
        self.cause = cause
        self._max_attempts = max_attempts
        self._on_wait = on_wait

    @property
    def message(self) -> str:
        return str(self.cause)

    @property
    def max_attempts(self) -> int:
        return self._max_attempts

    def wait(self, count: int) -> None:
        self._on_wait(count)


class ScriptedOperation:
    """Operation that raises or returns the scripted outcomes in order.

    Exceptions in ``outcomes`` are raised; any other item is returned.
    The last outcome repeats once the script runs out.
    """

    def __init__(self, outcomes: list) -> None:
        self.outcomes = outcomes
        self.calls = 0

    def __call__(self):
        outcome = self.outcomes[min(self.calls, len(self.outcomes) - 1)]
        self.calls += 1
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def wait_counts() -> list[int]:
    """Counts passed to StubRetryableError.wait, in order."""
    return []


@pytest.fixture
def stub_error(wait_counts: list[int]) -> StubRetryableError:
    """Retryable stub with a budget of 2 that records its wait counts."""
    return StubRetryableError(ValueError("foobar"), 2, wait_counts.append)
