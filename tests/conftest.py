"""
Pytest fixtures and configuration for cacher tests.

Provides fake primary stores, failing cache stores and a controllable clock.
"""

from typing import Any

import pytest

from cacher.behavior import CacheBehavior
from cacher.core.config import DISABLE_ENV
from cacher.core.exceptions import CacheBackendError
from cacher.stores.base import CacheStore, PrimaryStore
from cacher.stores.memory import MemoryCacheStore

# =============================================================================
# Fakes
# =============================================================================


class FakePrimaryStore(PrimaryStore):
    """Primary store that records every call it receives."""

    name = "default"

    def __init__(self, rows: list[dict[str, Any]] | None = None, config: dict[str, Any] | None = None):
        self.rows = list(rows or [])
        self.config = config if config is not None else {"host": "localhost", "database": "app"}
        self.reads: list[dict[str, Any]] = []
        self.writes: list[dict[str, Any]] = []
        self.deletes: list[Any] = []

    def connection_config(self) -> dict[str, Any]:
        return dict(self.config)

    def read(self, query: dict[str, Any]) -> list[dict[str, Any]]:
        self.reads.append(query)
        conditions = query.get("conditions") or {}
        return [
            row for row in self.rows
            if all(row.get(field) == value for field, value in conditions.items())
        ]

    def write(self, record: dict[str, Any]) -> bool:
        self.writes.append(record)
        self.rows = [row for row in self.rows if row.get("id") != record.get("id")]
        self.rows.append(record)
        return True

    def delete(self, record_id: Any) -> bool:
        self.deletes.append(record_id)
        before = len(self.rows)
        self.rows = [row for row in self.rows if row.get("id") != record_id]
        return len(self.rows) < before


class BrokenConnectionStore(FakePrimaryStore):
    """Primary store whose connection parameters cannot be read."""

    def connection_config(self) -> dict[str, Any]:
        raise RuntimeError("connection refused")


class FailingCacheStore(MemoryCacheStore):
    """Memory store whose purge and (optionally) reads always fail."""

    def __init__(self, fail_reads: bool = False):
        super().__init__(default_duration=60)
        self.fail_reads = fail_reads
        self.purge_calls = 0

    def get(self, key: str) -> bytes | None:
        if self.fail_reads:
            raise CacheBackendError("get", "backend unavailable")
        return super().get(key)

    def purge_all(self, entity: str) -> int:
        self.purge_calls += 1
        raise CacheBackendError("purge", "backend unavailable")


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def cache_enabled(monkeypatch):
    """Make sure the environment never disables caching behind a test's back."""
    monkeypatch.delenv(DISABLE_ENV, raising=False)


@pytest.fixture
def posts() -> list[dict[str, Any]]:
    """Sample Post rows."""
    return [
        {"id": 1, "title": "Hello", "published": True},
        {"id": 2, "title": "Draft", "published": False},
        {"id": 3, "title": "World", "published": True},
    ]


@pytest.fixture
def primary(posts) -> FakePrimaryStore:
    """Recording primary store seeded with posts."""
    return FakePrimaryStore(posts)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def memory_cache(clock) -> MemoryCacheStore:
    """In-memory cache store driven by the fake clock."""
    return MemoryCacheStore(default_duration=3600, clock=clock)


@pytest.fixture
def caches(memory_cache) -> dict[str, CacheStore]:
    return {"default": memory_cache}


@pytest.fixture
def behavior(caches) -> CacheBehavior:
    """Behavior with the global switch forced on (caching enabled)."""
    return CacheBehavior(caches=caches, disabled=lambda: False)


@pytest.fixture
def disabled_behavior(caches) -> CacheBehavior:
    """Behavior with caching globally switched off."""
    return CacheBehavior(caches=caches, disabled=lambda: True)


@pytest.fixture
def make_primary():
    """Factory for extra recording primary stores."""
    return FakePrimaryStore


@pytest.fixture
def broken_primary() -> BrokenConnectionStore:
    return BrokenConnectionStore()


@pytest.fixture
def failing_cache() -> FailingCacheStore:
    """Cache store whose purges always fail."""
    return FailingCacheStore()


@pytest.fixture
def failing_read_cache() -> FailingCacheStore:
    """Cache store whose reads and purges always fail."""
    return FailingCacheStore(fail_reads=True)
