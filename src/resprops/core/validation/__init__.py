"""Validation adapter: protocol and default rule-based implementation."""

from resprops.core.validation.protocol import Validator
from resprops.core.validation.rules import RuleValidator

__all__ = [
    "Validator",
    "RuleValidator",
]
