"""
Custom exceptions for cacher.
"""


class CacherError(Exception):
    """Base exception for all cacher errors."""

    def __init__(self, message: str, details: str | None = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class ConfigurationError(CacherError):
    """Raised when an entity or its cache binding cannot be set up."""

    def __init__(self, entity: str, details: str | None = None):
        super().__init__(f"Cannot configure caching for {entity}", details=details)
        self.entity = entity


class EntityNotConfiguredError(ConfigurationError):
    """Raised when an interceptor runs for an entity that was never configured."""

    def __init__(self, entity: str):
        super().__init__(
            entity,
            details="call configure() for this entity before intercepting its operations.",
        )


class CacheBackendError(CacherError):
    """Raised when a cache store operation fails."""

    def __init__(self, operation: str, details: str | None = None):
        super().__init__(f"Cache error during {operation}", details=details)
        self.operation = operation


class ValidationError(CacherError):
    """Raised when data validation fails."""

    def __init__(self, field: str, value: str, reason: str):
        super().__init__(
            f"Validation failed for {field}",
            details=f"Value '{value}' is invalid: {reason}",
        )
        self.field = field
        self.value = value
        self.reason = reason


class InvalidDurationError(ValidationError):
    """Raised when a cache duration string cannot be parsed."""

    def __init__(self, value: str):
        super().__init__(
            "duration",
            value,
            "expected a number of seconds or a phrase like '+1 hour' or '30 minutes'",
        )
