"""Core type definitions for resprops."""

from __future__ import annotations

import dataclasses
from types import MappingProxyType
from typing import Any, Final, Protocol, runtime_checkable


class _NotPassed:
    """Sentinel type for "no argument given" (distinct from None)."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "NOT_PASSED"

    def __bool__(self) -> bool:
        return False


NOT_PASSED: Final = _NotPassed()
"""Marks a get-or-set call that received no value, and options that were never given."""


@runtime_checkable
class Freezable(Protocol):
    """Objects that report their own immutability."""

    __frozen__: bool


def is_frozen(value: Any) -> bool:
    """Check whether a value is frozen for materialization purposes.

    Scalars such as strings and ints are NOT frozen here: a resolved default
    of ``"web"`` is still written back into the resource.

    Args:
        value: Value to inspect.

    Returns:
        True if the value is a frozenset, a read-only mapping proxy, a frozen
        dataclass instance or a Freezable reporting ``__frozen__``.
    """
    if isinstance(value, frozenset | MappingProxyType):
        return True
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        params = getattr(type(value), "__dataclass_params__", None)
        if params is not None and params.frozen:
            return True
    if isinstance(value, Freezable):
        return bool(value.__frozen__)
    return False
