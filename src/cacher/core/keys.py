"""
Cache key derivation.

Keys have the shape ``{entity}:{source}:{digest}`` with a ``:gz`` suffix for
compressed entries, so every entry of an entity shares the ``{entity}:``
prefix that stores purge by.
"""

import copy
import hashlib
import json
from typing import Any

from cacher.core.models import DIRECTIVE_KEY, KEY_SEPARATOR, QUERY_DEFAULTS

COMPRESSED_SUFFIX = "gz"


def normalize_query(query: dict[str, Any] | None) -> dict[str, Any]:
    """Pad a query with the default find options.

    The directive key is dropped so a query hashes the same whether or
    not it asked for caching.
    """
    normalized = copy.deepcopy(QUERY_DEFAULTS)
    normalized.update(query or {})
    normalized.pop(DIRECTIVE_KEY, None)
    return normalized


def query_digest(query: dict[str, Any] | None) -> str:
    """Return a stable MD5 hex digest of the normalized query."""
    payload = json.dumps(
        normalize_query(query),
        sort_keys=True,
        separators=(",", ":"),
        default=repr,
    )
    return hashlib.md5(payload.encode("utf-8")).hexdigest()


def make_key(*parts: str) -> str:
    """Create a cache key from multiple parts.

    Args:
        *parts: Key components to join.

    Returns:
        Colon-separated cache key.
    """
    return KEY_SEPARATOR.join(str(p) for p in parts)


def entity_prefix(entity: str) -> str:
    """Return the prefix shared by every key of ``entity``."""
    return f"{entity}{KEY_SEPARATOR}"


def query_key(
    entity: str,
    source: str,
    query: dict[str, Any] | None,
    compress: bool = False,
) -> str:
    """Build the cache key for one read of ``entity`` against ``source``."""
    parts = [entity, source, query_digest(query)]
    if compress:
        parts.append(COMPRESSED_SUFFIX)
    return make_key(*parts)
