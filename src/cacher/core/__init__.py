"""
Core module for cacher.

Contains data models, configuration, key derivation and exceptions.
"""

from cacher.core.duration import parse_duration
from cacher.core.exceptions import (
    CacheBackendError,
    CacherError,
    ConfigurationError,
    EntityNotConfiguredError,
    InvalidDurationError,
    ValidationError,
)
from cacher.core.keys import make_key, normalize_query, query_key
from cacher.core.models import ReadPlan, Route, Settings
from cacher.core.validation import validate_entity_name

__all__ = [
    # Models
    "ReadPlan",
    "Route",
    "Settings",
    # Helpers
    "make_key",
    "normalize_query",
    "parse_duration",
    "query_key",
    "validate_entity_name",
    # Exceptions
    "CacherError",
    "ConfigurationError",
    "EntityNotConfiguredError",
    "CacheBackendError",
    "ValidationError",
    "InvalidDurationError",
]
