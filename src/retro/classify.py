"""Turn plain errors into retryable ones by message pattern.

Lets the code that raises an error stay unaware of retry policies: a
higher layer lists the messages worth retrying and the policy to use.
"""

from __future__ import annotations

import re
from typing import Callable, Iterable, Optional, TypeVar, Union

from retro.policies import RetryableError

T = TypeVar("T")

ErrorCreator = Callable[[Exception], RetryableError]
"""Builds a RetryableError from a plain error."""

PatternLike = Union[str, re.Pattern[str]]


def _compile(patterns: Iterable[PatternLike]) -> list[re.Pattern[str]]:
    return [p if isinstance(p, re.Pattern) else re.compile(p) for p in patterns]


def wrap_retryable_error(
    error: Optional[Exception],
    patterns: Iterable[PatternLike],
    creator: ErrorCreator,
) -> Optional[Exception]:
    """Classify an error against a list of message patterns.

    Patterns are tried in order with ``re.search`` against ``str(error)``;
    the first match wins.

    Returns:
        None if ``error`` is None, ``creator(error)`` if any pattern matches,
        otherwise ``error`` itself.
    """
    if error is None:
        return None
    message = str(error)
    for pattern in _compile(patterns):
        if pattern.search(message):
            return creator(error)
    return error


class ErrorClassifier:
    """Reusable pattern list bound to one policy builder.

    Example::

        classifier = ErrorClassifier(
            [r"connection refused", r"timed out"],
            lambda e: StaticRetryableError(e, max_attempts=5, wait_seconds=3),
        )
        do_with_retry(classifier.wrap(lambda: client.fetch(url)))
    """

    def __init__(self, patterns: Iterable[PatternLike], creator: ErrorCreator) -> None:
        self.patterns = _compile(patterns)
        self.creator = creator

    def classify(self, error: Optional[Exception]) -> Optional[Exception]:
        """Return the retryable form of ``error`` if its message matches."""
        return wrap_retryable_error(error, self.patterns, self.creator)

    __call__ = classify

    def wrap(self, operation: Callable[[], T]) -> Callable[[], T]:
        """Wrap an operation so matching exceptions surface as retryable.

        Non-matching exceptions propagate unchanged.
        """

        def classified() -> T:
            try:
                return operation()
            except Exception as exc:
                wrapped = self.classify(exc)
                if wrapped is exc:
                    raise
                raise wrapped from exc

        return classified
