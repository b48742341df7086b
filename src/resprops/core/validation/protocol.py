"""Validator protocol for swappable validation/coercion backends.

The engine never interprets validation rules itself. It hands the property's
rule set to a Validator and only distinguishes three outcomes: success,
ValidationFailedError, and CannotValidateStaticallyError.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Validator(Protocol):
    """Coerces and validates property values."""

    def coerce(self, resource: Any, rule: Callable[..., Any], value: Any) -> Any:
        """Apply a coercion rule to a value.

        Args:
            resource: Resource context, or None when resolving statically.
            rule: Coercion callable declared on the property.
            value: Raw value.

        Returns:
            Coerced value.

        Raises:
            CannotValidateStaticallyError: If the rule needs a resource and
                none was supplied.
        """
        ...

    def validate(
        self, resource: Any, name: Any, rules: Mapping[str, Any], value: Any
    ) -> None:
        """Validate a value against a rule set.

        Args:
            resource: Resource context, or None when validating statically.
            name: Property name used in diagnostics.
            rules: Validation rules declared on the property.
            value: Coerced value to check.

        Raises:
            ValidationFailedError: If any rule rejects the value.
            CannotValidateStaticallyError: If a rule needs a resource and none
                was supplied.
        """
        ...
