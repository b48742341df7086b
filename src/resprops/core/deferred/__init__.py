"""Deferred values: lazily evaluated thunks bound to resource context."""

from resprops.core.deferred.models import (
    DeferredValue,
    accepts_positional,
    exec_in_resource,
    is_deferred,
    lazy,
)

__all__ = [
    "DeferredValue",
    "lazy",
    "is_deferred",
    "exec_in_resource",
    "accepts_positional",
]
