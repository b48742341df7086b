"""Property construction and derivation.

Usage:
    port = define_property(name="port", kind_of=int, required=True)
    path = define_property(name="path", kind_of=str, name_property=True)

    # Reusable property type, specialized per resource
    Mode = define_property(kind_of=str, regex=r"^0?[0-7]{3}$")
    mode = Mode.derive(name="mode", default="0644")
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from resprops.core.errors import CannotValidateStaticallyError, PropertyConstructionError
from resprops.core.property import engine
from resprops.core.property.models import DEFAULT_OPTIONS, DefaultKind, PropertyDefinition
from resprops.core.validation import RuleValidator, Validator
from resprops.deprecation import DeprecationKind
from resprops.storage import MethodAccessor, PropertyAccessor, SlotAccessor, UnboundAccessor

_default_validator = RuleValidator()


def _normalize_key(key: Any) -> str:
    return str(key).replace("-", "_")


def normalize_options(options: Mapping[Any, Any]) -> dict[str, Any]:
    """Normalize option keys and legacy aliases, preserving declaration order.

    - Keys become strings with ``-`` folded to ``_``.
    - ``instance_variable_name`` becomes ``storage_slot`` (leading ``@`` stripped).
    - ``name_attribute`` becomes ``name_property`` in place.

    Raises:
        PropertyConstructionError: If ``name_attribute`` and ``name_property``
            are both given with different values.
    """
    normalized: dict[str, Any] = {}
    for key, value in options.items():
        normalized[_normalize_key(key)] = value

    if "name" in normalized and normalized["name"] is not None:
        normalized["name"] = str(normalized["name"])

    if "instance_variable_name" in normalized:
        if "storage_slot" in normalized:
            raise PropertyConstructionError(
                "Cannot specify both storage_slot and instance_variable_name on a property"
            )
        slot = normalized["instance_variable_name"]
        if slot is not None:
            slot = str(slot).lstrip("@")
        normalized = {
            ("storage_slot" if k == "instance_variable_name" else k): (
                slot if k == "instance_variable_name" else v
            )
            for k, v in normalized.items()
        }
    elif normalized.get("storage_slot") is not None:
        normalized["storage_slot"] = str(normalized["storage_slot"])

    if "name_attribute" in normalized:
        if "name_property" in normalized:
            if bool(normalized["name_property"]) != bool(normalized["name_attribute"]):
                raise PropertyConstructionError(
                    f"Cannot specify both name_property and name_attribute with different "
                    f"values on property {normalized.get('name', '<property type>')}"
                )
            del normalized["name_attribute"]
        else:
            normalized = {
                ("name_property" if k == "name_attribute" else k): v
                for k, v in normalized.items()
            }
    return normalized


def _make_accessor(options: Mapping[str, Any]) -> PropertyAccessor:
    accessor = options.get("accessor")
    if accessor is not None:
        return accessor
    name = options.get("name")
    slot = options["storage_slot"] if "storage_slot" in options else name
    if slot is not None:
        return SlotAccessor(slot)
    if name is None:
        # Unnamed property types get a real accessor when derived with a name
        return UnboundAccessor()
    return MethodAccessor(f"get_{name}", f"set_{name}")


def define_property(
    options: Mapping[Any, Any] | None = None, /, **kwargs: Any
) -> PropertyDefinition:
    """Create a property from options.

    Args:
        options: Optional mapping of options; merged before ``kwargs``.
        **kwargs: Property options. Control options are ``name``,
            ``declared_in``, ``storage_slot`` (None: opaque),
            ``instance_variable_name`` (legacy), ``default``, ``name_property``,
            ``name_attribute`` (legacy), ``identity``, ``desired_state``,
            ``required``, ``coerce``, ``accessor``, ``validator`` and
            ``deprecations``. Anything else is a validation rule.

    Returns:
        New PropertyDefinition with its static default cached when possible.

    Raises:
        PropertyConstructionError: If default mechanisms conflict irreconcilably.
    """
    merged: dict[Any, Any] = dict(options or {})
    merged.update(kwargs)
    normalized = normalize_options(merged)

    preferred: str | None = None
    if "default" in normalized and normalized.get("name_property"):
        keys = list(normalized)
        if keys.index("name_property") < keys.index("default"):
            del normalized["default"]
            preferred = "name_property"
        else:
            del normalized["name_property"]
            preferred = "default"

    validator: Validator = normalized.get("validator") or _default_validator
    definition = PropertyDefinition(
        options=normalized,
        accessor=_make_accessor(normalized),
        validator=validator,
        deprecations=normalized.get("deprecations"),
    )

    if preferred is not None:
        engine.emit_deprecation(
            definition,
            DeprecationKind.CONFLICTING_DEFAULT,
            f"Cannot specify both default and name_property together on property "
            f"{definition}. Only one ({preferred}) will be obeyed. This will become an "
            f"error in a future version. Please remove one or the other from the property.",
        )

    # Validate the default early so declaration errors surface at declaration
    # time, and cache it if no resource is needed.
    if definition.default_kind is DefaultKind.STATIC:
        try:
            stored = engine.input_to_stored_value(
                definition, None, definition.default, is_default=True
            )
        except CannotValidateStaticallyError:
            pass
        else:
            definition._cache_default(stored)
    return definition


def derive_property(definition: PropertyDefinition, **modified_options: Any) -> PropertyDefinition:
    """Create a new property like ``definition`` with some options changed.

    ``default``, ``name_property`` and ``name_attribute`` replace each other:
    giving any of them drops all three from the original first.

    Args:
        definition: Property to derive from.
        **modified_options: Options that would be passed to ``define_property``.

    Returns:
        The new PropertyDefinition.
    """
    options = dict(definition.options)
    modified = {_normalize_key(k): v for k, v in modified_options.items()}
    if any(key in modified for key in DEFAULT_OPTIONS):
        options = {k: v for k, v in options.items() if k not in DEFAULT_OPTIONS}
    if "instance_variable_name" in modified:
        options.pop("storage_slot", None)
    options.update(modified)
    return define_property(options)
