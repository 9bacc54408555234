"""Demonstration callers of the retry loop.

- insert: stores values under random keys, retrying on key collisions.
- network: a simulated flaky server, with static and backoff policies.
"""

from retro.exceptions import RetroError


class DemoError(RetroError):
    """Base for errors raised by the demo programs."""
