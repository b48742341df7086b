"""Storage backends for property values."""

from resprops.storage.local import PropertyState
from resprops.storage.protocol import (
    MethodAccessor,
    PropertyAccessor,
    SlotAccessor,
    UnboundAccessor,
    state_of,
)

__all__ = [
    "PropertyState",
    "PropertyAccessor",
    "SlotAccessor",
    "MethodAccessor",
    "UnboundAccessor",
    "state_of",
]
