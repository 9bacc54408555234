"""Retry policies attached to errors.

A RetryableError wraps the exception an operation failed with and declares
how many attempts are allowed and how long to pause before the next one.
Two shapes are built in:

- StaticRetryableError: the same pause before every retry (possibly zero).
- BackoffRetryableError: a pause of ``count**4 + count + offset`` seconds,
  for conditions expected to clear after an unknown, possibly long, delay.

Sleeping goes through an injectable ``sleep`` callable so callers and tests
can substitute a no-op or a recorder without touching the retry loop.
"""

from __future__ import annotations

import abc
import time
from typing import Callable

from retro.exceptions import RetroError

Sleep = Callable[[float], None]

DEFAULT_BACKOFF_OFFSET = 10.0


class RetryableError(RetroError, abc.ABC):
    """Base for errors that carry a retry policy.

    Attributes:
        cause: The wrapped exception. Its message is the message of this error.
    """

    def __init__(
        self,
        cause: BaseException,
        max_attempts: int,
        *,
        sleep: Sleep = time.sleep,
    ) -> None:
        if type(self) is RetryableError:
            raise TypeError(
                "RetryableError is abstract; use StaticRetryableError, "
                "BackoffRetryableError or a subclass that implements delay()"
            )
        if max_attempts < 0:
            raise ValueError(f"max_attempts must be >= 0, got {max_attempts}")
        self.cause = cause
        self._max_attempts = max_attempts
        self._sleep = sleep
        super().__init__(str(cause))
        self.__cause__ = cause

    def __str__(self) -> str:
        return str(self.cause)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self.cause!r}, "
            f"max_attempts={self._max_attempts})"
        )

    def __reduce__(self):
        # Exception.__reduce__ would call cls(*self.args) and lose the policy
        return (type(self), (self.cause, self._max_attempts), self.__dict__.copy())

    @property
    def message(self) -> str:
        return str(self.cause)

    @property
    def max_attempts(self) -> int:
        return self._max_attempts

    @abc.abstractmethod
    def delay(self, count: int) -> float:
        """Seconds to pause after ``count`` attempts have already been made."""
        raise NotImplementedError(f"{type(self).__name__} does not implement delay()")

    def wait(self, count: int) -> None:
        """Block the calling thread for ``delay(count)`` seconds."""
        seconds = self.delay(count)
        if seconds > 0:
            self._sleep(seconds)


class StaticRetryableError(RetryableError):
    """Retries up to ``max_attempts`` times, sleeping a fixed time in between.

    A ``wait_seconds`` of 0 retries immediately, which suits failures such as
    an in-memory key collision where another try costs nothing.
    """

    def __init__(
        self,
        cause: BaseException,
        max_attempts: int,
        wait_seconds: float = 0,
        *,
        sleep: Sleep = time.sleep,
    ) -> None:
        if wait_seconds < 0:
            raise ValueError(f"wait_seconds must be >= 0, got {wait_seconds}")
        super().__init__(cause, max_attempts, sleep=sleep)
        self.wait_seconds = wait_seconds

    def __reduce__(self):
        return (
            type(self),
            (self.cause, self._max_attempts, self.wait_seconds),
            self.__dict__.copy(),
        )

    def delay(self, count: int) -> float:
        return self.wait_seconds


class BackoffRetryableError(RetryableError):
    """Retries up to ``max_attempts`` times with a steeply widening backoff.

    The pause after ``count`` attempts is ``count**4 + count + offset``
    seconds: 10, 12, 28, 73, ... with the default offset.
    """

    def __init__(
        self,
        cause: BaseException,
        max_attempts: int,
        *,
        offset: float = DEFAULT_BACKOFF_OFFSET,
        sleep: Sleep = time.sleep,
    ) -> None:
        if offset < 0:
            raise ValueError(f"offset must be >= 0, got {offset}")
        super().__init__(cause, max_attempts, sleep=sleep)
        self.offset = offset

    def delay(self, count: int) -> float:
        return count**4 + count + self.offset
