"""Core functionalities: property definitions, deferred values, validation and resolution.

Architecture Note:
    core/ holds the property engine itself. Per-resource state lives in
    storage/, resource-type declaration in resource/, and the advisory
    side channel in deprecation/.
"""

from resprops.core.deferred import DeferredValue, is_deferred, lazy
from resprops.core.errors import (
    CannotValidateStaticallyError,
    DeprecatedFeatureError,
    PropertyConfigError,
    PropertyConstructionError,
    PropertyError,
    ValidationFailedError,
)
from resprops.core.property import (
    DefaultKind,
    PropertyDefinition,
    define_property,
    derive_property,
    engine,
)
from resprops.core.types import NOT_PASSED, Freezable, is_frozen
from resprops.core.validation import RuleValidator, Validator

__all__ = [
    # Types
    "NOT_PASSED",
    "Freezable",
    "is_frozen",
    # Deferred
    "DeferredValue",
    "lazy",
    "is_deferred",
    # Errors
    "PropertyError",
    "PropertyConstructionError",
    "CannotValidateStaticallyError",
    "ValidationFailedError",
    "PropertyConfigError",
    "DeprecatedFeatureError",
    # Validation
    "Validator",
    "RuleValidator",
    # Property
    "PropertyDefinition",
    "DefaultKind",
    "define_property",
    "derive_property",
    "engine",
]
