"""
In-process cache store.
"""

import time
from typing import Callable

from cacher.core.keys import entity_prefix
from cacher.stores.base import CacheStore


class MemoryCacheStore(CacheStore):
    """Dictionary-backed cache store.

    Entries live for the lifetime of the process. A duration of 0 means
    the entry never expires.
    """

    def __init__(
        self,
        default_duration: int | str | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        super().__init__(default_duration)
        self._clock = clock
        self._entries: dict[str, tuple[bytes, float | None]] = {}

    def get(self, key: str) -> bytes | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if expires_at is not None and expires_at <= self._clock():
            del self._entries[key]
            return None
        return value

    def set(self, key: str, value: bytes, duration: int | None = None) -> None:
        ttl = self._resolve_duration(duration)
        expires_at = self._clock() + ttl if ttl > 0 else None
        self._entries[key] = (value, expires_at)

    def delete(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None

    def purge_all(self, entity: str) -> int:
        prefix = entity_prefix(entity)
        doomed = [key for key in self._entries if key.startswith(prefix)]
        for key in doomed:
            del self._entries[key]
        return len(doomed)

    def clear(self) -> int:
        count = len(self._entries)
        self._entries.clear()
        return count

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None
