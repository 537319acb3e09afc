"""
Input validation utilities for cacher.

Entity names become the leading segment of every cache key, so they must
not contain the key separator or anything that could blur one entity's
entries into another's.
"""

from cacher.core.exceptions import ValidationError
from cacher.core.models import KEY_SEPARATOR


def validate_entity_name(name: str) -> str:
    """Validate an entity name used in cache keys.

    Args:
        name: Entity type name, e.g. ``"Post"``.

    Returns:
        The name, unchanged.

    Raises:
        ValidationError: If the name is empty, contains the key separator
            or control characters.
    """
    if not isinstance(name, str) or not name:
        raise ValidationError("entity", str(name), "Entity name cannot be empty")

    if KEY_SEPARATOR in name:
        raise ValidationError(
            "entity", name, f"Entity name cannot contain '{KEY_SEPARATOR}'"
        )

    if any(ord(c) < 32 or ord(c) == 127 for c in name):
        raise ValidationError(
            "entity", repr(name), "Entity name contains invalid control characters"
        )

    return name

