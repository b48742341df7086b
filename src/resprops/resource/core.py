"""Resource base class and property declaration.

Usage:
    class File(Resource):
        path = prop(kind_of=str, name_property=True, identity=True)
        mode = prop(kind_of=str, regex=r"^0?[0-7]{3}$", default="0644")
        owner = prop(kind_of=str, required=True)

    res = File("/etc/motd")
    res.path                      # "/etc/motd" (materialized name_property default)
    res.owner = "root"
    res.property_call("mode")     # get-or-set, as in ``mode`` / ``mode "0600"``
    del res.mode                  # reset
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, ClassVar

from resprops.core.property import PropertyDefinition, define_property, engine
from resprops.core.types import NOT_PASSED
from resprops.resource.property_set import PropertySet
from resprops.storage import PropertyState


@dataclass(frozen=True, slots=True)
class PropertyDeclaration:
    """Options captured by ``prop`` until the owning class binds a name."""

    options: dict[str, Any] = field(default_factory=dict)


def prop(options: dict[str, Any] | None = None, /, **kwargs: Any) -> PropertyDeclaration:
    """Declare a property on a Resource subclass.

    The property is built once the class body is complete, with ``name`` set
    to the attribute name and ``declared_in`` to the class.

    Args:
        options: Optional mapping of property options.
        **kwargs: Property options (see ``define_property``).

    Returns:
        Declaration placeholder replaced by a PropertyDescriptor on the class.
    """
    merged = dict(options or {})
    merged.update(kwargs)
    return PropertyDeclaration(merged)


class PropertyDescriptor:
    """Class attribute routing attribute access to the property engine.

    ``res.x`` gets, ``res.x = v`` sets and ``del res.x`` resets. On the class,
    ``File.x`` returns the PropertyDefinition.
    """

    __slots__ = ("name",)

    def __init__(self, name: str) -> None:
        self.name = name

    def __get__(self, instance: Any, owner: type | None = None) -> Any:
        if instance is None:
            return owner.properties[self.name]  # type: ignore[union-attr]
        return engine.get(type(instance).properties[self.name], instance)

    def __set__(self, instance: Any, value: Any) -> None:
        engine.set_value(type(instance).properties[self.name], instance, value)

    def __delete__(self, instance: Any) -> None:
        engine.reset(type(instance).properties[self.name], instance)


def _snake_case(name: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()


def _bind_properties(cls: type[Resource]) -> None:
    """Build the class's PropertySet from its declarations, parent set first."""
    properties = getattr(cls, "properties", PropertySet())
    for attr, value in list(cls.__dict__.items()):
        if isinstance(value, PropertyDeclaration):
            definition = define_property(value.options, name=attr, declared_in=cls)
        elif isinstance(value, PropertyDefinition):
            definition = value.derive(name=attr, declared_in=cls)
        else:
            continue
        properties = properties.with_property(definition)
        setattr(cls, attr, PropertyDescriptor(attr))
    cls.properties = properties


class Resource:
    """Base class for resources whose configuration is held in properties.

    Each subclass gets its own PropertySet (inheriting its parent's), and each
    instance its own PropertyState.
    """

    resource_name: ClassVar[str] = "resource"
    properties: ClassVar[PropertySet] = PropertySet()

    name = prop(kind_of=str, desired_state=False)

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if "resource_name" not in cls.__dict__:
            cls.resource_name = _snake_case(cls.__name__)
        _bind_properties(cls)

    def __init__(self, name: str, **values: Any) -> None:
        self.property_state = PropertyState()
        self.name = name
        for key, value in values.items():
            if key not in type(self).properties:
                raise TypeError(f"{self} has no property {key!r}")
            setattr(self, key, value)

    @classmethod
    def identity_properties(cls) -> list[PropertyDefinition]:
        """Identity properties, falling back to ``name`` when none are flagged."""
        result = cls.properties.identity_properties()
        if not result:
            result = [cls.properties["name"]]
        return result

    @classmethod
    def state_properties(cls) -> list[PropertyDefinition]:
        """Properties that are part of desired state."""
        return cls.properties.desired_state_properties()

    def property_call(self, name: str, value: Any = NOT_PASSED) -> Any:
        """Get-or-set a property: no value gets, a value sets, None gets with a notice."""
        return engine.call(type(self).properties[name], self, value)

    def property_is_set(self, name: str) -> bool:
        return engine.is_set(type(self).properties[name], self)

    def reset_property(self, name: str) -> None:
        engine.reset(type(self).properties[name], self)

    @property
    def identity(self) -> Any:
        """Identity value: a single property's value, or a dict of several."""
        identity_properties = self.identity_properties()
        result = {p.name: engine.get(p, self) for p in identity_properties}
        if len(identity_properties) == 1:
            return next(iter(result.values()))
        return result

    def state_for_reporting(self) -> dict[str, Any]:
        """Desired-state values that are identity or have been set."""
        state: dict[str, Any] = {}
        for definition in self.state_properties():
            if definition.is_identity or engine.is_set(definition, self):
                state[definition.name] = engine.get(definition, self)
        return state

    def __str__(self) -> str:
        name = None
        if hasattr(self, "property_state") and self.property_state.has_value("name"):
            name = engine.get(type(self).properties["name"], self)
        return f"{self.resource_name}[{name if name is not None else ''}]"

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self}>"


_bind_properties(Resource)
