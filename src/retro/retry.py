"""Retry loop driven by policies attached to errors.

Provides do_with_retry() -- re-invokes a zero-argument operation for as
long as it fails with a retryable error whose attempt budget is not yet
spent. The policy travels with the error, so the code that raises a
failure decides whether and how it is retried.

Each step waits BEFORE the next attempt: by the time do_with_retry()
returns or raises, all waiting for the final attempt has already happened.
"""

from __future__ import annotations

import functools
import logging
from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar

from retro.protocols import Retryable

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Attempt(Generic[T]):
    """Outcome of a single try.

    Attributes:
        retry: True if the operation should be invoked again.
        error: The exception the operation raised, or None on success.
        value: The operation's return value (None unless it succeeded).
    """

    retry: bool
    error: Optional[Exception] = None
    value: Optional[T] = None


@dataclass
class RetryHandler:
    """Counts attempts for one retry sequence.

    Created fresh for every do_with_retry() call and never shared.
    """

    attempts: int = 0

    def try_once(self, operation: Callable[[], T]) -> Attempt[T]:
        """Invoke the operation once and decide whether to try again.

        A retryable failure with budget left waits via its own policy
        (``error.wait(attempts)``) before this method returns.
        """
        try:
            value = operation()
        except Exception as exc:
            if not isinstance(exc, Retryable):
                return Attempt(retry=False, error=exc)

            retrying = self.attempts < exc.max_attempts
            if retrying:
                logger.debug(
                    "Attempt %d failed with retryable error (%s); "
                    "waiting before retry (max_attempts=%d)",
                    self.attempts + 1,
                    exc.message,
                    exc.max_attempts,
                )
                exc.wait(self.attempts)
                # the same error object may be raised again; keep only the last attempt's frames
                exc.__traceback__ = None
            else:
                logger.debug(
                    "Retry budget exhausted after %d attempts: %s",
                    self.attempts + 1,
                    exc.message,
                )
            self.attempts += 1
            return Attempt(retry=retrying, error=exc)

        return Attempt(retry=False, value=value)


def do_with_retry(operation: Callable[[], T]) -> T:
    """Run an operation, retrying as dictated by the errors it raises.

    Args:
        operation: Zero-argument callable. Raising an error that satisfies
            the Retryable protocol requests another attempt.

    Returns:
        Whatever the successful invocation returned.

    Raises:
        Exception: The last exception raised by the operation, unchanged --
            either a non-retryable error or a retryable one whose budget ran out.
    """
    handler = RetryHandler()
    attempt = handler.try_once(operation)
    while attempt.retry:
        attempt = handler.try_once(operation)

    if attempt.error is not None:
        raise attempt.error
    return attempt.value  # type: ignore[return-value]


def with_retry(func: Callable[..., T]) -> Callable[..., T]:
    """Decorator form of do_with_retry().

    Example::

        @with_retry
        def fetch(server_id):
            ...

        fetch("abc123")  # retried according to the errors fetch raises
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs) -> T:
        return do_with_retry(lambda: func(*args, **kwargs))

    return wrapper
