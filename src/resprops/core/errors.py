"""Error hierarchy for property resolution.

Propagation policy:
    PropertyConstructionError, ValidationFailedError and PropertyConfigError
    are fatal to the calling operation. CannotValidateStaticallyError always
    propagates, even where invalid defaults are otherwise forgiven.
    DeprecatedFeatureError is only raised by an escalating deprecation sink.
"""

from __future__ import annotations

from typing import Any


class PropertyError(Exception):
    """Base class for all property engine errors."""

    pass


class PropertyConstructionError(PropertyError, ValueError):
    """Raised when a property is declared with conflicting options."""

    pass


class CannotValidateStaticallyError(PropertyError):
    """Raised when coercion or validation needs a resource that is not available."""

    pass


class ValidationFailedError(PropertyError, ValueError):
    """Raised when a value fails validation, or a required property has no value.

    Attributes:
        property_name: Name of the property that failed.
        rule: Name of the failing rule (``"required"`` for missing values).
    """

    def __init__(self, message: str, property_name: Any = None, rule: str | None = None):
        super().__init__(message)
        self.property_name = property_name
        self.rule = rule


class PropertyConfigError(PropertyError):
    """Raised on structural misuse, e.g. resetting an opaque property."""

    pass


class DeprecatedFeatureError(PropertyError):
    """Raised by an escalating deprecation sink instead of warning."""

    pass
