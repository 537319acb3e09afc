"""
cacher

A cache-aside layer for entity finds. Reads are answered from a cache
store when caching is requested (or automatic for the entity) and the
entity's cached reads are purged before saves and deletes.

Quick Start:
    >>> from cacher import CacheBehavior, MemoryCacheStore
    >>> behavior = CacheBehavior(caches={"default": MemoryCacheStore()})
    >>> behavior.configure("Post", post_store, {"auto": True})
    >>> behavior.find("Post", {"conditions": {"id": 1}})

    # Opt a single read in, with its own lifetime:
    >>> behavior.find("Post", {"conditions": {"id": 1}, "cache": "+1 hour"})
"""

__version__ = "0.1.0"

from cacher.behavior import CacheBehavior

# Exceptions
from cacher.core.exceptions import (
    CacheBackendError,
    CacherError,
    ConfigurationError,
    EntityNotConfiguredError,
    InvalidDurationError,
    ValidationError,
)

# Data models
from cacher.core.models import ReadPlan, Route, Settings
from cacher.registry import BindingRegistry
from cacher.source import CacheSource

# Stores
from cacher.stores import CacheStore, MemoryCacheStore, PrimaryStore, SQLiteCacheStore

__all__ = [
    # Version
    "__version__",
    # Behavior
    "CacheBehavior",
    "BindingRegistry",
    "CacheSource",
    # Models
    "ReadPlan",
    "Route",
    "Settings",
    # Stores
    "CacheStore",
    "MemoryCacheStore",
    "PrimaryStore",
    "SQLiteCacheStore",
    # Exceptions
    "CacherError",
    "ConfigurationError",
    "EntityNotConfiguredError",
    "CacheBackendError",
    "ValidationError",
    "InvalidDurationError",
]
