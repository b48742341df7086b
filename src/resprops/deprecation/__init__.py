"""Deprecation side channel: notices, sink protocol and built-in sinks."""

from resprops.deprecation.models import (
    DeprecationKind,
    DeprecationNotice,
    PropertyDeprecationWarning,
)
from resprops.deprecation.protocol import DeprecationSink
from resprops.deprecation.sinks import (
    LoggingSink,
    NullSink,
    RaisingSink,
    WarningsSink,
    get_deprecation_sink,
    set_deprecation_sink,
)

__all__ = [
    "DeprecationKind",
    "DeprecationNotice",
    "PropertyDeprecationWarning",
    "DeprecationSink",
    "WarningsSink",
    "LoggingSink",
    "RaisingSink",
    "NullSink",
    "get_deprecation_sink",
    "set_deprecation_sink",
]
