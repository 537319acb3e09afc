"""
Abstract base classes for the stores cacher sits between.

A primary store is the authoritative data source for one entity type.
A cache store is a key-value backend holding serialized result sets.
"""

from abc import ABC, abstractmethod
from typing import Any

from cacher.core.config import default_ttl
from cacher.core.duration import parse_duration


class PrimaryStore(ABC):
    """Authoritative data source for a single entity type.

    Implementations wrap whatever the surrounding framework reads from:
    an ORM session, a repository, a remote API.
    """

    #: Identifies the store inside cache keys and binding configs.
    name: str = "default"

    def connection_config(self) -> dict[str, Any]:
        """Return the connection parameters copied into cache bindings.

        Only consulted when a binding is first created.
        """
        return {}

    @abstractmethod
    def read(self, query: dict[str, Any]) -> Any:
        """Run a find query and return its results."""

    @abstractmethod
    def write(self, record: dict[str, Any]) -> bool:
        """Persist a record."""

    @abstractmethod
    def delete(self, record_id: Any) -> bool:
        """Remove a record by id."""


class CacheStore(ABC):
    """Key-value cache backend with per-entry expiry.

    Values are opaque bytes; a ``None`` from :meth:`get` is a miss.
    Every method raises :class:`~cacher.core.exceptions.CacheBackendError`
    when the backend fails.
    """

    def __init__(self, default_duration: int | str | None = None):
        """Initialize the store.

        Args:
            default_duration: Lifetime applied when ``set`` gets none.
                Seconds or a duration phrase. Defaults to the configured TTL.
        """
        if default_duration is None:
            self.duration = default_ttl()
        else:
            self.duration = parse_duration(default_duration)

    @abstractmethod
    def get(self, key: str) -> bytes | None:
        """Return the stored value, or None if missing or expired."""

    @abstractmethod
    def set(self, key: str, value: bytes, duration: int | None = None) -> None:
        """Store a value, expiring after ``duration`` seconds."""

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Delete one entry. Returns True if it existed."""

    @abstractmethod
    def purge_all(self, entity: str) -> int:
        """Delete every entry belonging to ``entity``. Returns the count."""

    def reconfigure(self, **options: Any) -> None:
        """Update store options in place.

        ``duration`` accepts seconds or a duration phrase; it becomes the
        lifetime of entries written from now on.
        """
        if "duration" in options:
            self.duration = parse_duration(options["duration"])

    def _resolve_duration(self, duration: int | None) -> int:
        return self.duration if duration is None else duration
