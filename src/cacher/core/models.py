"""
Core data models for cacher.

This module defines the per-entity cache settings, the routing decision made
for each read, and the defaults used when normalizing queries.
"""

from dataclasses import asdict, dataclass, field, fields
from enum import Enum
from typing import Any

from cacher.core.exceptions import ValidationError

# Separates the segments of a cache key; entity names may not contain it
KEY_SEPARATOR = ":"

# Query key carrying the per-call cache directive
DIRECTIVE_KEY = "cache"

# Default binding datasource identifier, recorded in every binding config
CACHE_DATASOURCE = "cacher.CacheSource"

# Every query is padded with these before hashing so that equivalent
# queries map to the same cache entry
QUERY_DEFAULTS: dict[str, Any] = {
    "conditions": None,
    "fields": None,
    "joins": [],
    "limit": None,
    "offset": None,
    "order": [],
    "page": 1,
    "group": None,
    "callbacks": True,
}


class Route(Enum):
    """Which backend services a read."""

    PRIMARY = "primary"
    CACHE = "cache"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Settings:
    """Cache settings for a single entity type.

    Attributes:
        cache_config_name: Name of the cache configuration (store) to use.
        clear_on_save: Purge the entity's cache before every save.
        clear_on_delete: Purge the entity's cache before every delete.
        auto: Cache every read unless the query opts out.
        compress: Store gzip-compressed payloads.
    """

    cache_config_name: str = "default"
    clear_on_delete: bool = True
    clear_on_save: bool = True
    auto: bool = False
    compress: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.cache_config_name, str) or not self.cache_config_name:
            raise ValidationError(
                "cache_config_name", repr(self.cache_config_name), "expected a non-empty string"
            )
        # "false" must not be read as a truthy flag
        for f in fields(self):
            value = getattr(self, f.name)
            if f.type in (bool, "bool") and not isinstance(value, bool):
                raise ValidationError(f.name, repr(value), "expected True or False")

    @classmethod
    def field_names(cls) -> frozenset[str]:
        """Return the option keys that map onto settings fields."""
        return frozenset(f.name for f in fields(cls))

    @classmethod
    def from_options(cls, options: dict[str, Any] | None = None) -> "Settings":
        """Build settings from caller options merged over the defaults.

        Keys that are not settings fields are ignored here; the behavior
        carries them into the binding config instead.

        Raises:
            ValidationError: If a flag is not a bool or the cache configuration
                name is not a non-empty string.
        """
        options = options or {}
        known = cls.field_names()
        return cls(**{k: v for k, v in options.items() if k in known})

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class ReadPlan:
    """Routing decision for one intercepted read.

    Attributes:
        query: The query to forward, with any cache directive removed.
        route: Backend that should service the read.
        directive: The directive value that was consumed, if any.
    """

    query: dict[str, Any]
    route: Route = Route.PRIMARY
    directive: Any = field(default=None, repr=False)

    @property
    def will_cache(self) -> bool:
        """Return True if the read goes through the cache."""
        return self.route is Route.CACHE
