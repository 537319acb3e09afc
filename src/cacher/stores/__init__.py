"""
Store interfaces and reference cache backends.

Provides in-memory and SQLite-based cache stores with TTL support.
"""

from cacher.stores.base import CacheStore, PrimaryStore
from cacher.stores.memory import MemoryCacheStore
from cacher.stores.sqlite import SQLiteCacheStore

__all__ = ["CacheStore", "MemoryCacheStore", "PrimaryStore", "SQLiteCacheStore"]
