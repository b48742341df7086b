"""Deprecation notice models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any


class DeprecationKind(Enum):
    """Situations the engine reports through the deprecation channel."""

    CONFLICTING_DEFAULT = auto()
    """Both default and name_property declared; only one is obeyed."""

    INVALID_DEFAULT = auto()
    """A default value failed validation and was returned anyway."""

    NONE_BECOMES_SET = auto()
    """A get-or-set call with None read a value that a set would change."""

    INVALID_NONE_VALUE = auto()
    """A get-or-set call with None, where None would not validate as a set."""


class PropertyDeprecationWarning(DeprecationWarning):
    """Warning category used by WarningsSink."""

    pass


@dataclass(frozen=True, slots=True)
class DeprecationNotice:
    """One advisory message emitted by the engine."""

    kind: DeprecationKind
    message: str
    property_name: Any = None
