"""Protocol definitions for Retro.

Defines the retryable capability checked by the retry loop.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Retryable(Protocol):
    """An error that carries its own retry budget and wait strategy.

    Any exception type providing these members is retried by
    ``do_with_retry``; everything else is terminal.
    """

    @property
    def message(self) -> str: ...

    @property
    def max_attempts(self) -> int: ...

    def wait(self, count: int) -> None:
        """Block before the next attempt.

        ``count`` is the number of attempts already made (0-based).
        """
        ...
