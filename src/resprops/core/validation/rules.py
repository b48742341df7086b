"""Default rule-based validator.

Supported rules:
    kind_of:   type or tuple of types (``isinstance`` check)
    equal_to:  iterable of allowed values
    regex:     pattern or list of patterns; value must be a str matching one
    type_:     any typing annotation, checked with a strict pydantic TypeAdapter
    callbacks: mapping of description -> predicate(value) or predicate(resource, value)

Usage:
    validator = RuleValidator()
    validator.validate(None, "port", {"kind_of": int}, 8080)
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from functools import lru_cache
from typing import Any

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from resprops.core.deferred import accepts_positional, exec_in_resource
from resprops.core.errors import (
    CannotValidateStaticallyError,
    PropertyConstructionError,
    ValidationFailedError,
)


@lru_cache(maxsize=256)
def _type_adapter(annotation: Any) -> TypeAdapter[Any]:
    return TypeAdapter(annotation)


def _type_names(kinds: type | tuple[type, ...]) -> str:
    if isinstance(kinds, tuple):
        return ", ".join(k.__name__ for k in kinds)
    return kinds.__name__


class RuleValidator:
    """Validator implementing a small, fixed rule vocabulary."""

    def coerce(self, resource: Any, rule: Callable[..., Any], value: Any) -> Any:
        """Run a coercion callable in resource context.

        Raises:
            CannotValidateStaticallyError: If ``resource`` is None.
        """
        return exec_in_resource(resource, rule, value)

    def validate(
        self, resource: Any, name: Any, rules: Mapping[str, Any], value: Any
    ) -> None:
        """Check ``value`` against every rule in ``rules``, in order.

        Raises:
            ValidationFailedError: On the first failing rule.
            PropertyConstructionError: If a rule key is not supported.
        """
        for rule, expected in rules.items():
            check = getattr(self, f"_check_{rule.rstrip('_')}", None)
            if check is None:
                raise PropertyConstructionError(
                    f"Unknown validation rule {rule!r} on property {name}"
                )
            check(resource, name, expected, value)

    def _check_kind_of(self, resource: Any, name: Any, kinds: Any, value: Any) -> None:
        if isinstance(kinds, list):
            kinds = tuple(kinds)
        if not isinstance(value, kinds):
            raise ValidationFailedError(
                f"Property {name} must be a kind of [{_type_names(kinds)}]! "
                f"You passed {value!r}.",
                property_name=name,
                rule="kind_of",
            )

    def _check_equal_to(self, resource: Any, name: Any, allowed: Any, value: Any) -> None:
        allowed = [allowed] if isinstance(allowed, str | bytes) else list(allowed)
        if value not in allowed:
            raise ValidationFailedError(
                f"Property {name} must be equal to one of {allowed!r}! "
                f"You passed {value!r}.",
                property_name=name,
                rule="equal_to",
            )

    def _check_regex(self, resource: Any, name: Any, patterns: Any, value: Any) -> None:
        if isinstance(patterns, str | re.Pattern):
            patterns = [patterns]
        if isinstance(value, str) and any(re.search(p, value) for p in patterns):
            return
        raise ValidationFailedError(
            f"Property {name}'s value {value!r} does not match regular expression "
            f"{[getattr(p, 'pattern', p) for p in patterns]!r}",
            property_name=name,
            rule="regex",
        )

    def _check_type(self, resource: Any, name: Any, annotation: Any, value: Any) -> None:
        try:
            _type_adapter(annotation).validate_python(value, strict=True)
        except PydanticValidationError as e:
            raise ValidationFailedError(
                f"Property {name} must be of type {annotation!r}! You passed {value!r}. "
                f"({e.error_count()} error(s): {e.errors()[0]['msg']})",
                property_name=name,
                rule="type_",
            ) from e

    def _check_callbacks(
        self, resource: Any, name: Any, callbacks: Mapping[str, Any], value: Any
    ) -> None:
        for description, predicate in callbacks.items():
            if accepts_positional(predicate, 2):
                if resource is None:
                    raise CannotValidateStaticallyError(
                        f"Callback {description!r} on property {name} needs a resource"
                    )
                ok = predicate(resource, value)
            else:
                ok = predicate(value)
            if not ok:
                raise ValidationFailedError(
                    f"Property {name}'s value {value!r} {description}!",
                    property_name=name,
                    rule="callbacks",
                )
