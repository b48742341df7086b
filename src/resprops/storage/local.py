"""Per-resource presence/value storage.

Simple dict-based storage keyed by storage slot. A slot that has never been
written (or was cleared) is absent; a slot holding ``None`` is present.

Usage:
    state = PropertyState()
    state.set("path", "/etc/motd")
    state.has_value("path")  # True
    state.clear("path")
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from resprops.core.types import NOT_PASSED


class PropertyState:
    """Presence/value pairs for one resource instance.

    Structure:
        _values[slot] = stored_value   (presence == slot in _values)
    """

    __slots__ = ("_values",)

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}

    def get(self, slot: str, default: Any = NOT_PASSED) -> Any:
        """Get the raw stored value for a slot.

        Args:
            slot: Storage slot identifier.
            default: Returned when the slot is absent.

        Returns:
            Stored value (possibly an unresolved DeferredValue), or ``default``.
        """
        return self._values.get(slot, default)

    def set(self, slot: str, value: Any) -> Any:
        """Store a value and mark the slot present.

        Returns:
            The stored value.
        """
        self._values[slot] = value
        return value

    def has_value(self, slot: str) -> bool:
        """Check if a slot is present, regardless of its value."""
        return slot in self._values

    def clear(self, slot: str) -> bool:
        """Remove a slot. Returns True if it was present."""
        return self._values.pop(slot, NOT_PASSED) is not NOT_PASSED

    def slots(self) -> Iterator[str]:
        """Iterate present slots in the order they were first set."""
        yield from self._values

    def __contains__(self, slot: object) -> bool:
        return slot in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"PropertyState({self._values!r})"
