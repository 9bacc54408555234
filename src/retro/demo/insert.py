"""Store integers under freshly generated keys, retrying on collisions.

A collision is retried immediately, up to 5 times: generating another
key costs nothing, so there is no reason to wait.
"""

from __future__ import annotations

import uuid
from typing import Callable, Optional

from retro.demo import DemoError
from retro.policies import StaticRetryableError
from retro.retry import do_with_retry

KeyFactory = Callable[[], str]

KEY_EXISTS_MAX_ATTEMPTS = 5


class MissingMapError(DemoError):
    """Raised when no data map is provided. Not retryable."""

    def __init__(self) -> None:
        super().__init__("data map is None")


class KeyExistsError(DemoError):
    """Raised when a generated key is already in use."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"key exists: {key}")


def uuid_key() -> str:
    return str(uuid.uuid4())


def store_int(
    data: Optional[dict[str, int]],
    value: int,
    *,
    key_factory: KeyFactory = uuid_key,
) -> str:
    """Store ``value`` under a new key and return the key.

    Raises:
        MissingMapError: If ``data`` is None.
        StaticRetryableError: Wrapping KeyExistsError on a key collision.
    """
    if data is None:
        raise MissingMapError()

    key = key_factory()
    if key in data:
        raise StaticRetryableError(KeyExistsError(key), KEY_EXISTS_MAX_ATTEMPTS, 0)
    data[key] = value
    return key


def store_all(count: int, *, key_factory: KeyFactory = uuid_key) -> dict[str, int]:
    """Store the integers ``0..count-1`` under unique keys."""
    data: dict[str, int] = {}
    for i in range(count):
        do_with_retry(lambda: store_int(data, i, key_factory=key_factory))
    return data
