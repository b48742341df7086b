"""Resolution engine: get, set, get-or-set, is_set and reset for one property.

Resolution order for ``get``:
    1. Stored value (lazy values evaluated, coerced and validated, not written back)
    2. Default (cached static default, or evaluated lazily), written back
       unless frozen or None
    3. ValidationFailedError if the property is required
    4. None

Usage:
    prop = define_property(name="port", kind_of=int, required=True)
    engine.set_value(prop, resource, 8080)
    engine.get(prop, resource)  # 8080
"""

from __future__ import annotations

import copy
from typing import TYPE_CHECKING, Any

from resprops.core.deferred import DeferredValue
from resprops.core.errors import (
    DeprecatedFeatureError,
    PropertyConfigError,
    ValidationFailedError,
)
from resprops.core.types import NOT_PASSED, is_frozen
from resprops.deprecation import DeprecationKind, DeprecationNotice, get_deprecation_sink

if TYPE_CHECKING:
    from resprops.core.property.models import PropertyDefinition

MUTABLE_CONTAINERS = (list, dict, set, bytearray)
"""Default types copied per resource on materialization; other defaults are shared as-is."""


def emit_deprecation(
    definition: PropertyDefinition, kind: DeprecationKind, message: str
) -> None:
    """Send a notice to the property's sink, or the process-wide sink."""
    sink = definition.deprecations or get_deprecation_sink()
    sink.emit(DeprecationNotice(kind=kind, message=message, property_name=definition.name))


def coerce(definition: PropertyDefinition, resource: Any, value: Any) -> Any:
    """Coerce a value into canonical form. Does no special handling for lazy values.

    None is never coerced on a property without a default.

    Raises:
        CannotValidateStaticallyError: If coercion is needed and ``resource`` is None.
    """
    rule = definition.coerce_rule
    if rule is None:
        return value
    if value is None and not definition.has_default:
        return value
    return definition.validator.coerce(resource, rule, value)


def validate(definition: PropertyDefinition, resource: Any, value: Any) -> None:
    """Validate a value against the property's rules.

    None is never validated on a property without a default.

    Raises:
        ValidationFailedError: If the value is invalid.
        CannotValidateStaticallyError: If validation needs a resource that is missing.
    """
    if value is None and not definition.has_default:
        return
    name = definition.name if definition.name is not None else "property_type"
    definition.validator.validate(resource, name, definition.validation_rules, value)


def coerce_and_validate(
    definition: PropertyDefinition, resource: Any, value: Any, is_default: bool = False
) -> Any:
    """Coerce then validate. Invalid defaults warn and are returned anyway.

    Args:
        definition: Property being resolved.
        resource: Resource context, or None for static resolution.
        value: Raw value.
        is_default: True when ``value`` came from the property's default.

    Returns:
        The coerced value.

    Raises:
        ValidationFailedError: If the value is invalid and not a default.
        CannotValidateStaticallyError: Always propagated, even for defaults.
    """
    result = coerce(definition, resource, value)
    try:
        validate(definition, resource, result)
    except ValidationFailedError as e:
        if not is_default:
            raise
        if value is None:
            message = (
                f"Default value None is invalid for property {definition}. Possible fixes: "
                f"1. Remove 'default=None' if None means 'undefined'. "
                f"2. Set a valid default value if there is a reasonable one. "
                f"3. Allow None as a valid value of your property. Error: {e}"
            )
        else:
            message = (
                f"Default value {value!r} is invalid for property {definition}. "
                f"This will become an error in a future version: {e}"
            )
        emit_deprecation(definition, DeprecationKind.INVALID_DEFAULT, message)
    return result


def input_to_stored_value(
    definition: PropertyDefinition, resource: Any, value: Any, is_default: bool = False
) -> Any:
    """Prepare an input value for storage. Lazy values pass through untouched."""
    if isinstance(value, DeferredValue):
        return value
    return coerce_and_validate(definition, resource, value, is_default=is_default)


def stored_value_to_output(
    definition: PropertyDefinition, resource: Any, value: Any, is_default: bool = False
) -> Any:
    """Prepare a stored value for output. Lazy values are evaluated and checked."""
    if isinstance(value, DeferredValue):
        value = value.evaluate(resource)
        value = coerce_and_validate(definition, resource, value, is_default=is_default)
    return value


def get(definition: PropertyDefinition, resource: Any) -> Any:
    """Get the property's value from a resource.

    Returns:
        The coerced, validated, non-lazy value; None if unset without default.

    Raises:
        ValidationFailedError: If the stored value is invalid, or the property
            is required and has neither value nor default.
    """
    accessor = definition.accessor
    if accessor.has_value(resource):
        value = accessor.get_value(resource)
        return stored_value_to_output(definition, resource, value)

    if definition.has_default:
        if definition.has_cached_default:
            value = definition.cached_default
            if isinstance(value, MUTABLE_CONTAINERS):
                # Every resource materializes its own copy of a mutable container
                value = copy.deepcopy(value)
        else:
            value = input_to_stored_value(
                definition, resource, definition.default, is_default=True
            )
        value = stored_value_to_output(definition, resource, value, is_default=True)

        if not is_frozen(value) and value is not None:
            accessor.set_value(resource, value)
        return value

    if definition.is_required:
        raise ValidationFailedError(
            f"{definition.name} is required", property_name=definition.name, rule="required"
        )
    return None


def set_value(definition: PropertyDefinition, resource: Any, value: Any) -> Any:
    """Set the property's value on a resource.

    Non-lazy values are coerced and validated first; lazy values are stored
    as-is and checked each time they are read.

    Returns:
        The stored value (still lazy if a DeferredValue was given).

    Raises:
        ValidationFailedError: If a non-lazy value is invalid.
    """
    return definition.accessor.set_value(
        resource, input_to_stored_value(definition, resource, value)
    )


def call(definition: PropertyDefinition, resource: Any, value: Any = NOT_PASSED) -> Any:
    """Get-or-set: no value gets, any value other than None sets.

    Passing None performs a get. It also tries the value as a set without
    storing it, and emits a deprecation notice when a future set-on-None
    would change what callers observe.

    Returns:
        The current value on get, or the stored value on set.
    """
    if value is NOT_PASSED:
        return get(definition, resource)
    if value is not None:
        return set_value(definition, resource, value)

    result = get(definition, resource)
    try:
        input_to_stored_value(definition, resource, value)
    except DeprecatedFeatureError:
        raise
    except Exception as e:
        emit_deprecation(
            definition,
            DeprecationKind.INVALID_NONE_VALUE,
            f"None is an invalid value for {definition}. "
            f"This warning will become an error in a future version. Error: {e}",
        )
    else:
        if result is not None:
            emit_deprecation(
                definition,
                DeprecationKind.NONE_BECOMES_SET,
                f"An attempt was made to change {definition.name} from {result!r} to None "
                f"by calling {definition.name}(None). This currently does a get rather than "
                f"a set; a future version will set the value to None.",
            )
    return result


def is_set(definition: PropertyDefinition, resource: Any) -> bool:
    """Check whether the property was set, or its default was materialized.

    Opaque properties always report True.
    """
    if definition.is_opaque:
        return True
    return definition.accessor.has_value(resource)


def reset(definition: PropertyDefinition, resource: Any) -> None:
    """Forget the property's value so the default is resolved again on next get.

    Raises:
        PropertyConfigError: If the property has no storage slot.
    """
    if definition.is_opaque:
        raise PropertyConfigError(
            f"Property {definition.name} has no storage slot defined and cannot be reset"
        )
    definition.accessor.clear_value(resource)
