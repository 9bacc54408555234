"""Tests for the demonstration programs."""

from __future__ import annotations

import itertools
import random

import pytest

from retro.demo import DemoError
from retro.demo.insert import KeyExistsError, MissingMapError, store_all, store_int
from retro.demo.network import (
    InvalidVersionError,
    NetworkError,
    NotReadyError,
    ServerSimulation,
)
from retro.policies import BackoffRetryableError, StaticRetryableError
from tests.conftest import RecordingSleep


class FixedRandom(random.Random):
    """random.Random whose random() replays a script."""

    def __init__(self, values: list[float]) -> None:
        super().__init__(0)
        self._values = iter(values)

    def random(self) -> float:
        return next(self._values)


FAIL = 0.0
PASS = 0.99


# ---------------------------------------------------------------------------
# insert
# ---------------------------------------------------------------------------


class TestStoreInt:
    def test_stores_under_new_key(self):
        data: dict[str, int] = {}

        key = store_int(data, 7, key_factory=lambda: "k1")

        assert data == {"k1": 7}
        assert key == "k1"

    def test_none_map_is_terminal(self):
        with pytest.raises(MissingMapError, match="data map is None"):
            store_int(None, 1)

    def test_collision_is_static_retryable(self):
        data = {"k1": 0}

        with pytest.raises(StaticRetryableError) as exc_info:
            store_int(data, 1, key_factory=lambda: "k1")

        err = exc_info.value
        assert isinstance(err.cause, KeyExistsError)
        assert err.max_attempts == 5
        assert err.delay(0) == 0
        assert str(err) == "key exists: k1"

    def test_default_keys_are_uuids(self):
        data: dict[str, int] = {}
        key = store_int(data, 1)
        assert len(key) == 36


class TestStoreAll:
    def test_stores_every_value(self):
        data = store_all(100)

        assert sorted(data.values()) == list(range(100))
        assert len(data) == 100

    def test_collisions_are_retried(self):
        keys = iter(["a", "a", "a", "b", "c"])

        data = store_all(3, key_factory=lambda: next(keys))

        assert data == {"a": 0, "b": 1, "c": 2}

    def test_persistent_collision_fails(self):
        keys = itertools.chain(["a"], itertools.repeat("a"))

        with pytest.raises(StaticRetryableError) as exc_info:
            store_all(2, key_factory=lambda: next(keys))

        assert isinstance(exc_info.value.cause, KeyExistsError)


# ---------------------------------------------------------------------------
# network
# ---------------------------------------------------------------------------


class TestServerSimulation:
    def test_happy_path(self):
        sleep = RecordingSleep()
        sim = ServerSimulation(FixedRandom([PASS, PASS, PASS]), sleep=sleep)

        assert sim.run("abc123") == "1"
        assert sim.calls == ["get_server", "use_server"]
        assert sleep.calls == []

    def test_network_errors_wait_statically(self):
        sleep = RecordingSleep()
        sim = ServerSimulation(FixedRandom([FAIL, FAIL, PASS, PASS, PASS]), sleep=sleep)

        assert sim.run("abc123") == "1"
        assert sim.calls == ["get_server", "get_server", "get_server", "use_server"]
        assert sleep.calls == [3, 3]

    def test_invalid_version_is_terminal(self):
        sleep = RecordingSleep()
        sim = ServerSimulation(FixedRandom([PASS, FAIL]), sleep=sleep)

        with pytest.raises(InvalidVersionError):
            sim.run("abc123")

        assert sim.calls == ["get_server"]
        assert sleep.calls == []

    def test_not_ready_backs_off(self):
        sleep = RecordingSleep()
        sim = ServerSimulation(FixedRandom([PASS, PASS, FAIL, FAIL, PASS]), sleep=sleep)

        assert sim.run("abc123") == "1"
        assert sim.calls.count("use_server") == 3
        assert sleep.calls == [10, 12]

    def test_not_ready_exhausts_budget(self):
        sleep = RecordingSleep()
        sim = ServerSimulation(FixedRandom([PASS, PASS] + [FAIL] * 6), sleep=sleep)

        with pytest.raises(BackoffRetryableError) as exc_info:
            sim.run("abc123")

        assert isinstance(exc_info.value.cause, NotReadyError)
        assert sleep.calls == [10, 12, 28, 73, 270]

    def test_network_budget_exhausted(self):
        sleep = RecordingSleep()
        sim = ServerSimulation(FixedRandom([FAIL] * 6), sleep=sleep)

        with pytest.raises(StaticRetryableError) as exc_info:
            sim.run("abc123")

        assert isinstance(exc_info.value.cause, NetworkError)
        assert str(exc_info.value) == "failed to connect"
        assert len(sleep.calls) == 5

    def test_seeded_runs_are_reproducible(self):
        def run(seed):
            sim = ServerSimulation(random.Random(seed), failure_rate=0.5, sleep=RecordingSleep())
            try:
                sim.run("abc123")
            except DemoError:
                pass
            except StaticRetryableError:
                pass
            except BackoffRetryableError:
                pass
            return sim.calls

        assert run(42) == run(42)

    def test_steps_run_separately(self):
        sleep = RecordingSleep()
        sim = ServerSimulation(FixedRandom([FAIL, PASS, PASS, FAIL, PASS]), sleep=sleep)

        version = sim.fetch_version("abc123")
        assert version == "1"
        assert sim.calls == ["get_server", "get_server"]

        sim.use("abc123", version)
        assert sim.calls[2:] == ["use_server", "use_server"]
        assert sleep.calls == [3, 10]

    @pytest.mark.parametrize("rate", [-0.1, 1.5])
    def test_invalid_failure_rate(self, rate):
        with pytest.raises(ValueError, match="failure_rate"):
            ServerSimulation(failure_rate=rate)

    def test_demo_errors_share_base(self):
        for error in (InvalidVersionError(), NetworkError(), NotReadyError()):
            assert isinstance(error, DemoError)
