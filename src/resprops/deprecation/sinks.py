"""Built-in deprecation sinks and the process-wide sink.

Usage:
    set_deprecation_sink(RaisingSink())   # escalate notices to errors
    set_deprecation_sink(LoggingSink())   # route to logging instead of warnings
"""

from __future__ import annotations

import logging
import warnings

from resprops.core.errors import DeprecatedFeatureError
from resprops.deprecation.models import DeprecationNotice, PropertyDeprecationWarning
from resprops.deprecation.protocol import DeprecationSink


class WarningsSink:
    """Reports notices with ``warnings.warn``."""

    def __init__(self, stacklevel: int = 4) -> None:
        self._stacklevel = stacklevel

    def emit(self, notice: DeprecationNotice) -> None:
        warnings.warn(notice.message, PropertyDeprecationWarning, stacklevel=self._stacklevel)


class LoggingSink:
    """Reports notices on a logger at WARNING level."""

    def __init__(self, logger: logging.Logger | str = "resprops.deprecation") -> None:
        if isinstance(logger, str):
            logger = logging.getLogger(logger)
        self._logger = logger

    def emit(self, notice: DeprecationNotice) -> None:
        self._logger.warning(
            "%s", notice.message, extra={"deprecation_kind": notice.kind.name}
        )


class RaisingSink:
    """Escalates every notice to DeprecatedFeatureError."""

    def emit(self, notice: DeprecationNotice) -> None:
        raise DeprecatedFeatureError(notice.message)


class NullSink:
    """Drops all notices."""

    def emit(self, notice: DeprecationNotice) -> None:
        pass


# Module-level sink instance
_sink: DeprecationSink = WarningsSink()


def get_deprecation_sink() -> DeprecationSink:
    """Access the process-wide deprecation sink.

    Returns:
        The sink used by properties that carry no sink of their own.
    """
    return _sink


def set_deprecation_sink(sink: DeprecationSink) -> DeprecationSink:
    """Replace the process-wide deprecation sink.

    Args:
        sink: New sink.

    Returns:
        The previously installed sink, so callers can restore it.
    """
    global _sink
    previous, _sink = _sink, sink
    return previous
