"""Deferred (lazy) values evaluated in resource context.

Usage:
    class File(Resource):
        path = prop(kind_of=str)
        backup_path = prop(kind_of=str, default=lazy(lambda r: r.path + ".bak"))

    res = File("web")
    res.mode = lazy(lambda: "0644")  # zero-argument thunks are allowed too
"""

from __future__ import annotations

import inspect
from collections.abc import Callable
from typing import Any

from resprops.core.errors import CannotValidateStaticallyError


def accepts_positional(fn: Callable[..., Any], count: int) -> bool:
    """Check whether a callable requires ``count`` positional arguments.

    Only required positional parameters count. Optional parameters and
    ``*args`` do not, so ``Path`` or ``str.strip`` never receive the resource.

    Args:
        fn: Callable to inspect.
        count: Number of positional arguments to test for.

    Returns:
        True if ``fn`` has at least ``count`` required positional parameters.
    """
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError):
        # Builtins without introspectable signatures: assume the simple form
        return False
    required = 0
    for param in signature.parameters.values():
        if param.kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ) and param.default is inspect.Parameter.empty:
            required += 1
    return required >= count


def exec_in_resource(resource: Any, fn: Callable[..., Any], *args: Any) -> Any:
    """Run a callable in the context of a resource.

    The resource is passed as the first argument when the callable requires
    one more positional argument than ``args``; otherwise only ``args`` are
    passed.

    Raises:
        CannotValidateStaticallyError: If ``resource`` is None.
    """
    if resource is None:
        raise CannotValidateStaticallyError("Cannot validate or coerce without a resource")
    if accepts_positional(fn, len(args) + 1):
        return fn(resource, *args)
    return fn(*args)


class DeferredValue:
    """A thunk whose evaluation is delayed until it is read from a resource.

    Not memoized: every ``evaluate`` call runs the wrapped computation again.
    Callers that want a stable value write the result back into storage.
    """

    __slots__ = ("_fn",)

    def __init__(self, fn: Callable[..., Any]) -> None:
        if not callable(fn):
            raise TypeError(f"DeferredValue requires a callable, got {type(fn).__name__}")
        self._fn = fn

    @property
    def fn(self) -> Callable[..., Any]:
        """Return the wrapped computation."""
        return self._fn

    def evaluate(self, resource: Any) -> Any:
        """Evaluate the thunk against a resource.

        Args:
            resource: Resource providing context (may be read by the thunk).

        Returns:
            Result of the wrapped computation.

        Raises:
            CannotValidateStaticallyError: If no resource is available.
        """
        return exec_in_resource(resource, self._fn)

    def __repr__(self) -> str:
        return f"DeferredValue({getattr(self._fn, '__qualname__', self._fn)!r})"


def lazy(fn: Callable[..., Any]) -> DeferredValue:
    """Wrap a callable as a DeferredValue.

    Args:
        fn: Either ``fn(resource)`` or a zero-argument ``fn()``.

    Returns:
        DeferredValue wrapping ``fn``.
    """
    return DeferredValue(fn)


def is_deferred(value: Any) -> bool:
    """Check if a value is an unresolved DeferredValue."""
    return isinstance(value, DeferredValue)
