"""
Registry of named cache bindings.
"""

import logging
from typing import Any, Mapping

from cacher.core.exceptions import ConfigurationError
from cacher.source import CacheSource
from cacher.stores.base import CacheStore, PrimaryStore

logger = logging.getLogger(__name__)

BINDING_SUFFIX = "-cache"


def binding_name(entity: str) -> str:
    """Return the binding name used for ``entity``."""
    return f"{entity}{BINDING_SUFFIX}"


class BindingRegistry:
    """Holds the CacheSource bindings created by a behavior."""

    def __init__(self, caches: Mapping[str, CacheStore]):
        self._caches = caches
        self._bindings: dict[str, CacheSource] = {}

    def exists(self, name: str) -> bool:
        return name in self._bindings

    def create(
        self,
        name: str,
        config: dict[str, Any],
        primary: PrimaryStore,
        entity: str | None = None,
    ) -> CacheSource:
        """Create and register a binding.

        Raises:
            ConfigurationError: If the binding already exists or names a
                cache configuration that is not registered.
        """
        entity = entity or name.removesuffix(BINDING_SUFFIX)
        if self.exists(name):
            raise ConfigurationError(entity, details=f"binding '{name}' already exists")

        config_name = config.get("cache_config_name", "default")
        if config_name not in self._caches:
            raise ConfigurationError(
                entity, details=f"no cache configuration named '{config_name}'"
            )

        source = CacheSource(name, entity, config, primary, self._caches)
        self._bindings[name] = source
        logger.debug("Created cache binding %s using '%s'", name, config_name)
        return source

    def get(self, name: str) -> CacheSource:
        try:
            return self._bindings[name]
        except KeyError:
            raise ConfigurationError(
                name.removesuffix(BINDING_SUFFIX), details=f"no binding named '{name}'"
            ) from None

    def names(self) -> list[str]:
        return sorted(self._bindings)

    def __len__(self) -> int:
        return len(self._bindings)
