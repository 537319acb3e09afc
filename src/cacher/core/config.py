"""
Runtime configuration read from the environment.
"""

import os
from pathlib import Path

from cacher.core.duration import parse_duration

DISABLE_ENV = "CACHER_DISABLE"
DB_PATH_ENV = "CACHER_DB_PATH"
DEFAULT_TTL_ENV = "CACHER_DEFAULT_TTL"

DEFAULT_TTL = 3600  # 1 hour

_TRUTHY = {"1", "true", "yes", "on"}


def cache_disabled() -> bool:
    """Return True if caching is globally switched off.

    Read on every call so that toggling ``CACHER_DISABLE`` takes effect
    without rebuilding any behavior.
    """
    return os.environ.get(DISABLE_ENV, "").strip().lower() in _TRUTHY


def default_db_path() -> Path:
    """Return the SQLite cache file path, honouring ``CACHER_DB_PATH``."""
    configured = os.environ.get(DB_PATH_ENV)
    if configured:
        return Path(configured).expanduser()
    return Path.home() / ".cacher" / "cache.db"


def default_ttl() -> int:
    """Return the default entry lifetime in seconds.

    ``CACHER_DEFAULT_TTL`` accepts anything :func:`parse_duration` does.

    Raises:
        InvalidDurationError: If the variable is set to an unparseable value.
    """
    raw = os.environ.get(DEFAULT_TTL_ENV)
    if not raw:
        return DEFAULT_TTL
    return parse_duration(raw)
