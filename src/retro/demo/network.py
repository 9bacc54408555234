"""A simulated flaky server, retried with static and backoff policies.

Connection failures clear quickly and are retried every 3 seconds.
A server that is not ready yet may take a long time, so it backs off.
An incompatible version can never succeed and is not retried.
"""

from __future__ import annotations

import logging
import random
import time
from typing import Optional

from retro.demo import DemoError
from retro.policies import BackoffRetryableError, Sleep, StaticRetryableError
from retro.retry import do_with_retry

logger = logging.getLogger(__name__)

NETWORK_MAX_ATTEMPTS = 5
NETWORK_WAIT_SECONDS = 3
NOT_READY_MAX_ATTEMPTS = 5
DEFAULT_FAILURE_RATE = 0.2


class InvalidVersionError(DemoError):
    """The server reported a version we cannot use. Not retryable."""

    def __init__(self) -> None:
        super().__init__("invalid version")


class NetworkError(DemoError):
    """An intermittent connection failure."""

    def __init__(self) -> None:
        super().__init__("failed to connect")


class NotReadyError(DemoError):
    """The resource exists but is not ready for use yet."""

    def __init__(self) -> None:
        super().__init__("resource not ready")


class ServerSimulation:
    """Pretend server calls that fail at random.

    Args:
        rng: Random source; pass a seeded ``random.Random`` for reproducible runs.
        failure_rate: Probability that any single failure check fires.
        sleep: Sleep used by the retry policies of the raised errors.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        *,
        failure_rate: float = DEFAULT_FAILURE_RATE,
        sleep: Sleep = time.sleep,
    ) -> None:
        if not 0 <= failure_rate <= 1:
            raise ValueError(f"failure_rate must be in [0, 1], got {failure_rate}")
        self.rng = rng or random.Random()
        self.failure_rate = failure_rate
        self.sleep = sleep
        self.calls: list[str] = []

    def _maybe_fail(self) -> bool:
        return self.rng.random() < self.failure_rate

    def get_server(self, server_id: str) -> str:
        """Return the server's version."""
        self.calls.append("get_server")
        if self._maybe_fail():
            raise StaticRetryableError(
                NetworkError(), NETWORK_MAX_ATTEMPTS, NETWORK_WAIT_SECONDS, sleep=self.sleep
            )
        if self._maybe_fail():
            raise InvalidVersionError()
        return "1"

    def use_server(self, server_id: str, version: str) -> None:
        self.calls.append("use_server")
        if self._maybe_fail():
            raise BackoffRetryableError(
                NotReadyError(), NOT_READY_MAX_ATTEMPTS, sleep=self.sleep
            )

    def fetch_version(self, server_id: str) -> str:
        """get_server(), retried per the errors it raises."""
        version = do_with_retry(lambda: self.get_server(server_id))
        logger.info("Server %s version %s", server_id, version)
        return version

    def use(self, server_id: str, version: str) -> None:
        """use_server(), retried per the errors it raises."""
        do_with_retry(lambda: self.use_server(server_id, version))

    def run(self, server_id: str) -> str:
        """Fetch the server version, then use it. Returns the version."""
        version = self.fetch_version(server_id)
        self.use(server_id, version)
        return version
