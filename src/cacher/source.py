"""
Caching source for a single entity.

A CacheSource stands in for an entity's primary store on cached reads:
it answers from the cache when it can and populates the cache from the
primary store when it cannot.
"""

import gzip
import logging
import pickle
from typing import Any, Mapping

from cacher.core.exceptions import CacheBackendError, ConfigurationError
from cacher.core.keys import query_key
from cacher.stores.base import CacheStore, PrimaryStore

logger = logging.getLogger(__name__)


class CacheSource:
    """Cache-aside read path bound to one entity.

    The binding's ``config`` dict is read on every call, so settings merged
    into it after creation (compression, cache configuration name) apply to
    subsequent reads.
    """

    def __init__(
        self,
        name: str,
        entity: str,
        config: dict[str, Any],
        primary: PrimaryStore,
        caches: Mapping[str, CacheStore],
    ):
        """Initialize the source.

        Args:
            name: Binding name, e.g. ``"Post-cache"``.
            entity: Entity type whose reads this source serves.
            config: Binding configuration (connection params plus settings).
            primary: Store consulted on cache misses.
            caches: Named cache configurations.
        """
        self.name = name
        self.entity = entity
        self.config = config
        self.primary = primary
        self._caches = caches

    @property
    def compress(self) -> bool:
        return bool(self.config.get("compress", False))

    @property
    def cache(self) -> CacheStore:
        """Resolve the cache store named by the binding config."""
        config_name = self.config.get("cache_config_name", "default")
        try:
            return self._caches[config_name]
        except KeyError:
            raise ConfigurationError(
                self.entity, details=f"no cache configuration named '{config_name}'"
            ) from None

    def key_for(self, query: dict[str, Any] | None) -> str:
        return query_key(self.entity, self.primary.name, query, self.compress)

    def read(self, query: dict[str, Any] | None = None) -> Any:
        """Return the results for ``query``, from cache when possible.

        Raises:
            CacheBackendError: If the cache cannot be read or written, or the
                results cannot be serialized.
        """
        query = query or {}
        cache = self.cache
        key = self.key_for(query)

        payload = cache.get(key)
        if payload is not None:
            logger.debug("Cache hit for %s (%s)", self.entity, key)
            return self._decode(payload)

        logger.debug("Cache miss for %s (%s)", self.entity, key)
        results = self.primary.read(query)
        cache.set(key, self._encode(results))
        return results

    def clear_model_cache(self, entity: str | None = None, query: dict[str, Any] | None = None) -> bool:
        """Purge cached reads of an entity.

        Args:
            entity: Entity to purge; defaults to the bound entity.
            query: When given, only the entry for this query is removed.

        Returns:
            True if the purge ran. Removing a single entry that was not
            cached still counts as success.
        """
        entity = entity or self.entity
        if query is not None:
            self.cache.delete(query_key(entity, self.primary.name, query, self.compress))
            return True
        removed = self.cache.purge_all(entity)
        logger.debug("Purged %d cached reads of %s", removed, entity)
        return True

    def _encode(self, results: Any) -> bytes:
        try:
            data = pickle.dumps(results, protocol=pickle.HIGHEST_PROTOCOL)
        except (pickle.PicklingError, TypeError, AttributeError) as e:
            raise CacheBackendError("serialize", str(e))
        if self.compress:
            data = gzip.compress(data)
        return data

    def _decode(self, payload: bytes) -> Any:
        try:
            if self.compress:
                payload = gzip.decompress(payload)
            return pickle.loads(payload)
        except (pickle.UnpicklingError, EOFError, OSError, AttributeError, ImportError) as e:
            raise CacheBackendError("deserialize", str(e))
