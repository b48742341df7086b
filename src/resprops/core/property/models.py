"""Property definition model.

A PropertyDefinition is immutable after construction, apart from the cached
static default which is computed once by ``define_property``.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum, auto
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from resprops.core.deferred import DeferredValue
from resprops.core.types import NOT_PASSED

if TYPE_CHECKING:
    from resprops.core.validation import Validator
    from resprops.deprecation import DeprecationSink
    from resprops.storage import PropertyAccessor


class DefaultKind(Enum):
    """The single active default mechanism of a property."""

    NONE = auto()
    STATIC = auto()
    DEFERRED = auto()
    NAME_PROPERTY = auto()


DEFAULT_OPTIONS = ("default", "name_property", "name_attribute")
"""Options that select a default mechanism; they replace each other on derive."""

CONTROL_OPTIONS = frozenset(
    {
        "name",
        "declared_in",
        "storage_slot",
        "instance_variable_name",
        "desired_state",
        "identity",
        "default",
        "name_property",
        "name_attribute",
        "coerce",
        "required",
        "accessor",
        "validator",
        "deprecations",
    }
)
"""Options consumed by the engine; everything else is a validation rule."""


def _read_name(resource: Any) -> Any:
    return resource.name


@dataclass(frozen=True, eq=False)
class PropertyDefinition:
    """Type and validation information for one property of a resource type.

    Build with ``define_property`` rather than directly: the constructor does
    not resolve option conflicts or cache the static default.

    Attributes:
        options: Normalized options in declaration order (used by ``derive``).
        accessor: Storage strategy: a SlotAccessor for ``storage_slot``, or the
            custom accessor of an opaque property.
        validator: Validator adapter for coercion and validation.
        deprecations: Sink for this property's notices (None: process-wide sink).
    """

    options: Mapping[str, Any]
    accessor: PropertyAccessor
    validator: Validator
    deprecations: DeprecationSink | None = None
    _stored_default: Any = field(default=NOT_PASSED, init=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "options", MappingProxyType(dict(self.options)))

    @property
    def name(self) -> Any:
        return self.options.get("name")

    @property
    def declared_in(self) -> type | None:
        return self.options.get("declared_in")

    @property
    def storage_slot(self) -> str | None:
        """Storage slot; None means the property is opaque."""
        if "storage_slot" in self.options:
            return self.options["storage_slot"]
        if self.name is not None:
            return str(self.name)
        return None

    @property
    def is_opaque(self) -> bool:
        return self.storage_slot is None

    @property
    def is_identity(self) -> bool:
        return bool(self.options.get("identity", False))

    @property
    def is_desired_state(self) -> bool:
        """Whether this property is part of desired state. Defaults to True."""
        return bool(self.options.get("desired_state", True))

    @property
    def is_required(self) -> bool:
        return bool(self.options.get("required", False))

    @property
    def is_name_property(self) -> bool:
        return bool(self.options.get("name_property", False))

    @property
    def coerce_rule(self) -> Callable[..., Any] | None:
        return self.options.get("coerce")

    @property
    def has_default(self) -> bool:
        return "default" in self.options or self.is_name_property

    @property
    def default_kind(self) -> DefaultKind:
        if "default" in self.options:
            if isinstance(self.options["default"], DeferredValue):
                return DefaultKind.DEFERRED
            return DefaultKind.STATIC
        if self.is_name_property:
            return DefaultKind.NAME_PROPERTY
        return DefaultKind.NONE

    @property
    def default(self) -> Any:
        """The raw default: not coerced, not validated, lazy values unevaluated.

        A name property defaults to a DeferredValue reading ``resource.name``.
        """
        if "default" in self.options:
            return self.options["default"]
        if self.is_name_property:
            return DeferredValue(_read_name)
        return None

    @property
    def has_cached_default(self) -> bool:
        return self._stored_default is not NOT_PASSED

    @property
    def cached_default(self) -> Any:
        """Coerced and validated static default, or NOT_PASSED if not cached."""
        return self._stored_default

    @property
    def validation_rules(self) -> Mapping[str, Any]:
        """Options passed to the validator (everything that is not a control option)."""
        return MappingProxyType(
            {k: v for k, v in self.options.items() if k not in CONTROL_OPTIONS}
        )

    def _cache_default(self, value: Any) -> None:
        object.__setattr__(self, "_stored_default", value)

    def derive(self, **modified_options: Any) -> PropertyDefinition:
        """Create a new property just like this one, with some options changed.

        See ``derive_property``.
        """
        # Late import to avoid circular dependency
        from resprops.core.property.core import derive_property

        return derive_property(self, **modified_options)

    # Engine shortcuts

    def get(self, resource: Any) -> Any:
        from resprops.core.property import engine

        return engine.get(self, resource)

    def set(self, resource: Any, value: Any) -> Any:
        from resprops.core.property import engine

        return engine.set_value(self, resource, value)

    def call(self, resource: Any, value: Any = NOT_PASSED) -> Any:
        from resprops.core.property import engine

        return engine.call(self, resource, value)

    def is_set(self, resource: Any) -> bool:
        from resprops.core.property import engine

        return engine.is_set(self, resource)

    def reset(self, resource: Any) -> None:
        from resprops.core.property import engine

        engine.reset(self, resource)

    def __str__(self) -> str:
        name = self.name if self.name is not None else "<property type>"
        declared_in = self.declared_in
        if declared_in is None:
            return str(name)
        resource_name = getattr(declared_in, "resource_name", None) or declared_in.__name__
        return f"{name} of resource {resource_name}"

    def __repr__(self) -> str:
        return f"PropertyDefinition({dict(self.options)!r})"
