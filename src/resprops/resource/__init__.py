"""Resource types: property declaration, descriptors and property sets."""

from resprops.resource.core import (
    PropertyDeclaration,
    PropertyDescriptor,
    Resource,
    prop,
)
from resprops.resource.property_set import PropertySet

__all__ = [
    "Resource",
    "prop",
    "PropertyDeclaration",
    "PropertyDescriptor",
    "PropertySet",
]
