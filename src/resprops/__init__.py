"""resprops: declarative property engine for infrastructure resources.

Usage:
    from resprops import Resource, lazy, prop

    class File(Resource):
        path = prop(kind_of=str, name_property=True, identity=True)
        owner = prop(kind_of=str, default="root")
        backup = prop(kind_of=str, default=lazy(lambda r: r.path + ".bak"))
        port = prop(kind_of=int, required=True)

    res = File("/etc/motd")
    res.backup                    # "/etc/motd.bak", now materialized
    res.property_is_set("backup") # True
    res.port                      # raises ValidationFailedError("port is required")
"""

__version__ = "0.1.0"

# Core primitives
from resprops.core import (
    NOT_PASSED,
    CannotValidateStaticallyError,
    DefaultKind,
    DeferredValue,
    DeprecatedFeatureError,
    Freezable,
    PropertyConfigError,
    PropertyConstructionError,
    PropertyDefinition,
    PropertyError,
    RuleValidator,
    ValidationFailedError,
    Validator,
    define_property,
    derive_property,
    engine,
    is_deferred,
    is_frozen,
    lazy,
)

# Deprecation side channel
from resprops.deprecation import (
    DeprecationKind,
    DeprecationNotice,
    DeprecationSink,
    LoggingSink,
    NullSink,
    PropertyDeprecationWarning,
    RaisingSink,
    WarningsSink,
    get_deprecation_sink,
    set_deprecation_sink,
)

# Resource types
from resprops.resource import PropertyDescriptor, PropertySet, Resource, prop

# Storage
from resprops.storage import MethodAccessor, PropertyAccessor, PropertyState, SlotAccessor

__all__ = [
    # Version
    "__version__",
    # Core
    "NOT_PASSED",
    "Freezable",
    "is_frozen",
    "DeferredValue",
    "lazy",
    "is_deferred",
    "PropertyDefinition",
    "DefaultKind",
    "define_property",
    "derive_property",
    "engine",
    "Validator",
    "RuleValidator",
    # Errors
    "PropertyError",
    "PropertyConstructionError",
    "CannotValidateStaticallyError",
    "ValidationFailedError",
    "PropertyConfigError",
    "DeprecatedFeatureError",
    # Deprecation
    "DeprecationKind",
    "DeprecationNotice",
    "DeprecationSink",
    "PropertyDeprecationWarning",
    "WarningsSink",
    "LoggingSink",
    "RaisingSink",
    "NullSink",
    "get_deprecation_sink",
    "set_deprecation_sink",
    # Resource
    "Resource",
    "prop",
    "PropertyDescriptor",
    "PropertySet",
    # Storage
    "PropertyState",
    "PropertyAccessor",
    "SlotAccessor",
    "MethodAccessor",
]
