"""Accessor protocol for swappable property storage strategies.

The engine reads and writes property values through a PropertyAccessor:
- SlotAccessor: the resource's own PropertyState (default)
- MethodAccessor: custom getter/setter methods on the resource (opaque properties)
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from resprops.core.errors import PropertyConfigError
from resprops.storage.local import PropertyState


@runtime_checkable
class PropertyAccessor(Protocol):
    """Get/set/presence capability for one property on any resource."""

    def get_value(self, resource: Any) -> Any:
        """Return the raw stored value."""
        ...

    def set_value(self, resource: Any, value: Any) -> Any:
        """Store a value. Returns the stored value."""
        ...

    def has_value(self, resource: Any) -> bool:
        """Check whether a value is present."""
        ...

    def clear_value(self, resource: Any) -> None:
        """Remove the stored value so that ``has_value`` becomes False."""
        ...


def state_of(resource: Any) -> PropertyState:
    """Get the PropertyState owned by a resource.

    Raises:
        PropertyConfigError: If the resource carries no PropertyState.
    """
    state = getattr(resource, "property_state", None)
    if not isinstance(state, PropertyState):
        raise PropertyConfigError(
            f"{type(resource).__name__} has no property_state; "
            f"engine-managed properties need a PropertyState on the resource"
        )
    return state


class SlotAccessor:
    """Reads and writes a named slot of the resource's PropertyState."""

    __slots__ = ("slot",)

    def __init__(self, slot: str) -> None:
        self.slot = slot

    def get_value(self, resource: Any) -> Any:
        return state_of(resource).get(self.slot, None)

    def set_value(self, resource: Any, value: Any) -> Any:
        return state_of(resource).set(self.slot, value)

    def has_value(self, resource: Any) -> bool:
        return state_of(resource).has_value(self.slot)

    def clear_value(self, resource: Any) -> None:
        state_of(resource).clear(self.slot)

    def __repr__(self) -> str:
        return f"SlotAccessor({self.slot!r})"


class MethodAccessor:
    """Delegates to getter/setter methods defined on the resource.

    Presence is meaningless without a slot, so ``has_value`` is always True
    and ``clear_value`` is refused.
    """

    __slots__ = ("getter", "setter")

    def __init__(self, getter: str, setter: str) -> None:
        self.getter = getter
        self.setter = setter

    def get_value(self, resource: Any) -> Any:
        return getattr(resource, self.getter)()

    def set_value(self, resource: Any, value: Any) -> Any:
        getattr(resource, self.setter)(value)
        return value

    def has_value(self, resource: Any) -> bool:
        return True

    def clear_value(self, resource: Any) -> None:
        raise PropertyConfigError(
            f"Values stored through {self.getter}/{self.setter} cannot be reset"
        )

    def __repr__(self) -> str:
        return f"MethodAccessor({self.getter!r}, {self.setter!r})"


class UnboundAccessor:
    """Accessor of a property type that has not been given a name yet."""

    __slots__ = ()

    def _fail(self) -> Any:
        raise PropertyConfigError(
            "Property type is not bound to a name; derive it with name=... before use"
        )

    def get_value(self, resource: Any) -> Any:
        return self._fail()

    def set_value(self, resource: Any, value: Any) -> Any:
        return self._fail()

    def has_value(self, resource: Any) -> bool:
        return bool(self._fail())

    def clear_value(self, resource: Any) -> None:
        self._fail()
