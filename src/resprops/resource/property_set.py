"""Ordered collection of a resource type's properties."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping

from resprops.core.property import PropertyDefinition


class PropertySet(Mapping[str, PropertyDefinition]):
    """Ordered mapping of property name to PropertyDefinition.

    Order is declaration order. Overriding a property keeps the original
    position, so identity enumeration stays deterministic across subclasses.
    """

    __slots__ = ("_properties",)

    def __init__(self, properties: Iterable[PropertyDefinition] = ()) -> None:
        self._properties: dict[str, PropertyDefinition] = {}
        for definition in properties:
            if definition.name is None:
                raise ValueError("PropertySet only holds named properties")
            self._properties[definition.name] = definition

    def __getitem__(self, name: str) -> PropertyDefinition:
        return self._properties[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._properties)

    def __len__(self) -> int:
        return len(self._properties)

    def with_property(self, definition: PropertyDefinition) -> PropertySet:
        """Return a new set with ``definition`` added or replacing its namesake."""
        properties = dict(self._properties)
        properties[definition.name] = definition
        return PropertySet(properties.values())

    def identity_properties(self) -> list[PropertyDefinition]:
        """Properties flagged as identity, in declaration order."""
        return [p for p in self._properties.values() if p.is_identity]

    def desired_state_properties(self) -> list[PropertyDefinition]:
        """Properties flagged as desired state, in declaration order."""
        return [p for p in self._properties.values() if p.is_desired_state]

    def name_property(self) -> PropertyDefinition | None:
        """The first property that defaults to the resource name, if any."""
        for definition in self._properties.values():
            if definition.is_name_property:
                return definition
        return None

    def __repr__(self) -> str:
        return f"PropertySet({list(self._properties)!r})"
