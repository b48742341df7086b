"""Property functionality: definition model, construction and resolution engine."""

from resprops.core.property import engine
from resprops.core.property.core import define_property, derive_property, normalize_options
from resprops.core.property.models import DefaultKind, PropertyDefinition

__all__ = [
    # Models
    "PropertyDefinition",
    "DefaultKind",
    # Core
    "define_property",
    "derive_property",
    "normalize_options",
    # Engine
    "engine",
]
