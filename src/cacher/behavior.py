"""
Cache-aside behavior for entity finds, saves and deletes.

The surrounding framework calls the interceptors from its own lifecycle
hooks (before find, before save, before delete); the behavior decides how
each read is routed and when an entity's cached reads are purged.

Example:
    behavior = CacheBehavior(caches={"default": MemoryCacheStore()})
    behavior.configure("Post", PostStore(), {"auto": True})

    behavior.find("Post", {"conditions": {"id": 1}})   # primary, then cached
    behavior.find("Post", {"conditions": {"id": 1}})   # served from cache
    behavior.save("Post", {"id": 1, "title": "Edited"})  # purges Post reads
"""

import logging
from typing import Any, Callable, Mapping

from cacher.core.config import cache_disabled
from cacher.core.exceptions import (
    CacheBackendError,
    ConfigurationError,
    EntityNotConfiguredError,
)
from cacher.core.models import CACHE_DATASOURCE, DIRECTIVE_KEY, ReadPlan, Route, Settings
from cacher.core.validation import validate_entity_name
from cacher.registry import BindingRegistry, binding_name
from cacher.source import CacheSource
from cacher.stores.base import CacheStore, PrimaryStore
from cacher.stores.memory import MemoryCacheStore

logger = logging.getLogger(__name__)


class CacheBehavior:
    """Cache-aside decorator holding settings and bindings per entity.

    Settings and bindings are owned by the instance. Callers must not run
    ``configure`` for the same entity concurrently, and each entity gets
    exactly one binding (``"{entity}-cache"``).
    """

    def __init__(
        self,
        caches: Mapping[str, CacheStore] | None = None,
        disabled: Callable[[], bool] = cache_disabled,
    ):
        """Initialize the behavior.

        Args:
            caches: Named cache configurations. Defaults to a single
                in-memory store named ``"default"``.
            disabled: Global switch consulted once per intercepted read.
        """
        if caches is None:
            caches = {"default": MemoryCacheStore()}
        self.caches = dict(caches)
        self.settings: dict[str, Settings] = {}
        self.bindings = BindingRegistry(self.caches)
        self._primaries: dict[str, PrimaryStore] = {}
        self._disabled = disabled

    def configure(
        self,
        entity: str,
        primary: PrimaryStore,
        options: dict[str, Any] | None = None,
    ) -> Settings:
        """Register ``entity`` for caching.

        ### Options
        - ``cache_config_name`` Name of the cache configuration to use. Default ``"default"``
        - ``clear_on_save`` Purge the entity's cached reads on saves
        - ``clear_on_delete`` Purge the entity's cached reads on deletes
        - ``auto`` Cache every read unless the query says otherwise
        - ``compress`` Store gzip-compressed payloads

        Other keys are carried into the binding config untouched.

        Args:
            entity: Entity type name, e.g. ``"Post"``.
            primary: The entity's authoritative store.
            options: Settings overriding the defaults.

        Returns:
            The merged settings now in effect for ``entity``.

        Raises:
            ConfigurationError: If the cache configuration is unknown or the
                primary store's connection parameters cannot be read.
            ValidationError: If the entity name is not usable in cache keys or
                an option has the wrong type.
        """
        validate_entity_name(entity)
        options = dict(options or {})
        settings = Settings.from_options(options)
        if settings.cache_config_name not in self.caches:
            raise ConfigurationError(
                entity, details=f"no cache configuration named '{settings.cache_config_name}'"
            )

        known = Settings.field_names()
        overlay = {k: v for k, v in options.items() if k not in known}
        overlay.update(settings.as_dict())

        name = binding_name(entity)
        if not self.bindings.exists(name):
            try:
                connection = dict(primary.connection_config())
            except Exception as e:
                raise ConfigurationError(entity, details=str(e)) from e
            config = {
                **connection,
                "original": primary.name,
                "datasource": CACHE_DATASOURCE,
                **overlay,
            }
            self.bindings.create(name, config, primary, entity=entity)
        else:
            binding = self.bindings.get(name)
            binding.config.update(overlay)
            binding.config["original"] = primary.name
            binding.primary = primary

        self.settings[entity] = settings
        self._primaries[entity] = primary
        return settings

    def intercept_read(self, entity: str, query: dict[str, Any] | None = None) -> ReadPlan:
        """Decide how a find on ``entity`` is serviced.

        If ``query["cache"]`` is true, the read is cached using the entity's
        settings. If it is a duration string, the entity's cache configuration
        is switched to that duration and the read is cached. If it is false,
        the read skips the cache even when ``auto`` is on. Without a directive
        the ``auto`` setting decides.

        The directive is removed from the returned query; the caller's dict
        is left untouched.

        Raises:
            EntityNotConfiguredError: If ``entity`` was never configured.
            InvalidDurationError: If a string directive is not a duration.
        """
        if query is None:
            query = {}
        if self._disabled():
            return ReadPlan(query=query)

        settings = self._settings_for(entity)
        outgoing = query
        directive = None
        if DIRECTIVE_KEY in query:
            outgoing = dict(query)
            directive = outgoing.pop(DIRECTIVE_KEY)

        if directive is None:
            will_cache = settings.auto
        elif isinstance(directive, str):
            self.caches[settings.cache_config_name].reconfigure(duration=directive)
            will_cache = True
        else:
            will_cache = bool(directive)

        route = Route.CACHE if will_cache else Route.PRIMARY
        logger.debug("Routing %s find to %s", entity, route)
        return ReadPlan(query=outgoing, route=route, directive=directive)

    def intercept_write(self, entity: str) -> bool:
        """Purge the entity's cached reads before a save, if configured.

        Always returns True: a failed purge never blocks the save.
        """
        if self._settings_for(entity).clear_on_save:
            self.clear_cache(entity)
        return True

    def intercept_delete(self, entity: str) -> bool:
        """Purge the entity's cached reads before a delete, if configured.

        Always returns True: a failed purge never blocks the delete.
        """
        if self._settings_for(entity).clear_on_delete:
            self.clear_cache(entity)
        return True

    def clear_cache(self, entity: str, query: dict[str, Any] | None = None) -> bool:
        """Clear the cached find results of ``entity``.

        Args:
            entity: The entity whose reads are purged.
            query: Only clear the entry cached for this query.

        Returns:
            True if the purge succeeded, False if the cache backend failed.
        """
        binding = self.binding(entity)
        try:
            return binding.clear_model_cache(entity, query)
        except CacheBackendError as e:
            logger.warning("Could not clear cached reads of %s: %s", entity, e)
            return False

    def binding(self, entity: str) -> CacheSource:
        """Return the cache binding of a configured entity."""
        self._settings_for(entity)
        return self.bindings.get(binding_name(entity))

    def find(self, entity: str, query: dict[str, Any] | None = None) -> Any:
        """Run a find through the read interceptor and dispatch it."""
        plan = self.intercept_read(entity, query)
        if plan.will_cache:
            return self.binding(entity).read(plan.query)
        outgoing = plan.query
        if DIRECTIVE_KEY in outgoing:
            outgoing = {k: v for k, v in outgoing.items() if k != DIRECTIVE_KEY}
        return self._primary_for(entity).read(outgoing)

    def save(self, entity: str, record: dict[str, Any]) -> bool:
        """Run the write interceptor, then save through the primary store."""
        if not self.intercept_write(entity):
            return False
        return self._primary_for(entity).write(record)

    def delete(self, entity: str, record_id: Any) -> bool:
        """Run the delete interceptor, then delete through the primary store."""
        if not self.intercept_delete(entity):
            return False
        return self._primary_for(entity).delete(record_id)

    def _settings_for(self, entity: str) -> Settings:
        try:
            return self.settings[entity]
        except KeyError:
            raise EntityNotConfiguredError(entity) from None

    def _primary_for(self, entity: str) -> PrimaryStore:
        self._settings_for(entity)
        return self._primaries[entity]
