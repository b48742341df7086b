"""Tests for the resolution engine: get, set, get-or-set, is_set and reset.

Why these tests exist:
- Presence and value are distinct: a materialized default counts as set
- Lazy values stored by set are re-evaluated on every get; lazy defaults are not
- Invalid defaults are forgiven, CannotValidateStaticallyError never is
"""

import threading
from dataclasses import dataclass
from pathlib import Path

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from resprops import (
    CannotValidateStaticallyError,
    DeferredValue,
    DeprecatedFeatureError,
    DeprecationKind,
    PropertyConfigError,
    RaisingSink,
    ValidationFailedError,
    define_property,
    engine,
    lazy,
)
from resprops.storage import PropertyState


# Required properties


def test_required_property_without_value_fails(host):
    port = define_property(name="port", kind_of=int, required=True)

    with pytest.raises(ValidationFailedError, match="port is required") as exc:
        engine.get(port, host)

    assert exc.value.property_name == "port"
    assert exc.value.rule == "required"


def test_required_property_after_set(host):
    port = define_property(name="port", kind_of=int, required=True)

    engine.set_value(port, host, 8080)

    assert engine.get(port, host) == 8080


def test_unset_property_without_default_is_none(host):
    owner = define_property(name="owner", kind_of=str)

    assert engine.get(owner, host) is None
    assert not engine.is_set(owner, host)


# Defaults and materialization


def test_static_default_is_materialized(host):
    mode = define_property(name="mode", kind_of=str, default="0644")

    assert not engine.is_set(mode, host)
    assert engine.get(mode, host) == "0644"
    assert engine.is_set(mode, host)
    assert host.property_state.get("mode") == "0644"


def test_none_default_is_not_materialized(host):
    owner = define_property(name="owner", kind_of=(str, type(None)), default=None)

    assert engine.get(owner, host) is None
    assert not engine.is_set(owner, host)


def test_frozen_default_is_not_materialized(host):
    groups = define_property(name="groups", default=frozenset({"wheel"}))

    assert engine.get(groups, host) == frozenset({"wheel"})
    assert not engine.is_set(groups, host)


def test_frozen_dataclass_default_is_not_materialized(host):
    @dataclass(frozen=True)
    class Owner:
        user: str

    owner = define_property(name="owner", default=Owner("root"))

    assert engine.get(owner, host) == Owner("root")
    assert not engine.is_set(owner, host)


def test_plain_object_default_is_returned_as_is(host):
    marker = object()
    prop = define_property(name="marker", default=marker)

    assert engine.get(prop, host) is marker
    assert engine.is_set(prop, host)


def test_uncopyable_default_is_returned_as_is(host):
    lock = threading.Lock()
    prop = define_property(name="lock", default=lock)

    assert engine.get(prop, host) is lock


def test_mutable_default_is_not_shared_between_resources(host_cls):
    a, b = host_cls("a"), host_cls("b")
    packages = define_property(name="packages", kind_of=list, default=[])

    engine.get(packages, a).append("nginx")

    assert engine.get(packages, a) == ["nginx"]
    assert engine.get(packages, b) == []


def test_name_property_defaults_to_resource_name(host):
    path = define_property(name="path", kind_of=str, name_property=True)

    assert engine.get(path, host) == "web"
    assert engine.is_set(path, host)


def test_deferred_default_tracks_dependency_until_first_get(host):
    host.root = "/srv"
    docroot = define_property(name="docroot", kind_of=str, default=lazy(lambda r: r.root + "/www"))

    host.root = "/var"
    first = engine.get(docroot, host)
    host.root = "/opt"
    second = engine.get(docroot, host)

    assert first == "/var/www"
    assert second == first


def test_deferred_default_is_coerced(host):
    size = define_property(name="size", default=lazy(lambda: "10"), coerce=lambda v: int(v))

    assert engine.get(size, host) == 10


def test_invalid_deferred_default_warns_and_returns_value(host, notices):
    port = define_property(name="port", kind_of=int, default=lazy(lambda: "http"))

    assert engine.get(port, host) == "http"
    assert notices.kinds() == [DeprecationKind.INVALID_DEFAULT]


def test_static_resolution_never_forgives_cannot_validate_statically():
    mode = define_property(name="mode", kind_of=str, default="644", coerce=lambda v: v.zfill(4))

    with pytest.raises(CannotValidateStaticallyError):
        engine.coerce_and_validate(mode, None, "644", is_default=True)


def test_invalid_value_with_is_default_false_propagates(host):
    port = define_property(name="port", kind_of=int)

    with pytest.raises(ValidationFailedError):
        engine.coerce_and_validate(port, host, "x", is_default=False)


# Coercion and validation on set


def test_set_stores_coerced_value(host):
    user = define_property(name="user", kind_of=str, coerce=lambda v: v.lower())

    assert engine.set_value(user, host, "ROOT") == "root"
    assert host.property_state.get("user") == "root"
    assert engine.get(user, host) == "root"


def test_builtin_coercers_receive_only_the_value(host):
    path = define_property(name="path", coerce=Path)
    user = define_property(name="user", kind_of=str, coerce=str.strip)

    engine.set_value(path, host, "/etc/motd")
    engine.set_value(user, host, "  root ")

    assert engine.get(path, host) == Path("/etc/motd")
    assert engine.get(user, host) == "root"


def test_coerce_receives_resource_when_it_accepts_two_arguments(host):
    label = define_property(name="label", coerce=lambda r, v: f"{r.name}:{v}")

    engine.set_value(label, host, "primary")

    assert engine.get(label, host) == "web:primary"


def test_none_is_not_coerced_or_validated_without_default(host):
    user = define_property(name="user", kind_of=str, coerce=lambda v: v.lower())

    engine.set_value(user, host, None)

    assert engine.is_set(user, host)
    assert engine.get(user, host) is None


def test_none_is_validated_when_property_has_default(host):
    user = define_property(name="user", kind_of=str, default="root")

    with pytest.raises(ValidationFailedError):
        engine.set_value(user, host, None)


def test_invalid_set_leaves_state_untouched(host):
    port = define_property(name="port", kind_of=int)

    with pytest.raises(ValidationFailedError):
        engine.set_value(port, host, "eighty")

    assert not engine.is_set(port, host)


# Lazy values


def test_lazy_set_is_evaluated_on_every_get(host):
    calls = []
    counter = define_property(name="counter", kind_of=int)

    engine.set_value(counter, host, lazy(lambda: calls.append(1) or len(calls)))

    assert engine.get(counter, host) == 1
    assert engine.get(counter, host) == 2
    assert isinstance(host.property_state.get("counter"), DeferredValue)


def test_lazy_set_skips_validation_until_read(host):
    port = define_property(name="port", kind_of=int)

    engine.set_value(port, host, lazy(lambda: "eighty"))

    with pytest.raises(ValidationFailedError):
        engine.get(port, host)


def test_lazy_set_can_reference_later_values(host):
    url = define_property(name="url", kind_of=str)

    engine.set_value(url, host, lazy(lambda r: f"http://{r.name}:{r.port}"))
    host.port = 8080

    assert engine.get(url, host) == "http://web:8080"


# is_set / reset


def test_reset_reruns_default_resolution(host):
    calls = []
    token = define_property(name="token", default=lazy(lambda: calls.append(1) or f"t{len(calls)}"))

    assert engine.get(token, host) == "t1"
    engine.reset(token, host)

    assert not engine.is_set(token, host)
    assert engine.get(token, host) == "t2"


def test_reset_of_unset_property_is_a_no_op(host):
    mode = define_property(name="mode")

    engine.reset(mode, host)

    assert not engine.is_set(mode, host)


class Package:
    """Resource with a custom getter/setter for an opaque property."""

    def __init__(self) -> None:
        self.name = "nginx"
        self.property_state = PropertyState()
        self._version = "1.0"

    def get_version(self):
        return self._version

    def set_version(self, value):
        self._version = value


def test_opaque_property_uses_resource_methods():
    pkg = Package()
    version = define_property(name="version", kind_of=str, storage_slot=None)

    assert engine.get(version, pkg) == "1.0"
    engine.set_value(version, pkg, "2.0")

    assert pkg._version == "2.0"
    assert engine.is_set(version, pkg)
    assert len(pkg.property_state) == 0


def test_opaque_property_cannot_be_reset():
    version = define_property(name="version", storage_slot=None)

    with pytest.raises(PropertyConfigError, match="cannot be reset"):
        engine.reset(version, Package())


def test_resource_without_property_state_is_a_config_error():
    mode = define_property(name="mode")

    with pytest.raises(PropertyConfigError, match="no property_state"):
        engine.get(mode, object())


# Get-or-set


def test_call_without_value_gets(host):
    mode = define_property(name="mode", default="0644")

    assert engine.call(mode, host) == "0644"


def test_call_with_value_sets(host):
    mode = define_property(name="mode", default="0644")

    assert engine.call(mode, host, "0600") == "0600"
    assert engine.get(mode, host) == "0600"


def test_call_with_none_gets_and_warns_about_future_set(host, notices):
    owner = define_property(name="owner", kind_of=str)
    engine.set_value(owner, host, "root")

    assert engine.call(owner, host, None) == "root"
    assert engine.get(owner, host) == "root"
    assert notices.kinds() == [DeprecationKind.NONE_BECOMES_SET]


def test_call_with_none_on_unset_property_is_silent(host, notices):
    owner = define_property(name="owner", kind_of=str)

    assert engine.call(owner, host, None) is None
    assert notices.notices == []


def test_call_with_invalid_none_warns(host, notices):
    owner = define_property(name="owner", kind_of=str, default="root")

    assert engine.call(owner, host, None) == "root"
    assert notices.kinds() == [DeprecationKind.INVALID_NONE_VALUE]


def test_call_with_none_does_not_swallow_escalated_deprecations(host):
    owner = define_property(name="owner", kind_of=str, default="root", deprecations=RaisingSink())

    with pytest.raises(DeprecatedFeatureError, match="None is an invalid value"):
        engine.call(owner, host, None)


# Invariants


@settings(suppress_health_check=[HealthCheck.function_scoped_fixture])
@given(st.integers())
def test_set_then_get_returns_coerced_value(host_cls, value):
    host = host_cls()
    doubled = define_property(name="doubled", kind_of=int, coerce=lambda v: v * 2)

    engine.set_value(doubled, host, value)

    assert engine.get(doubled, host) == value * 2


@settings(suppress_health_check=[HealthCheck.function_scoped_fixture])
@given(st.text())
def test_static_default_is_stable_and_materialized(host_cls, default):
    host = host_cls()
    prop = define_property(name="prop", kind_of=str, default=default)

    first = engine.get(prop, host)
    second = engine.get(prop, host)

    assert first == second == default
    assert engine.is_set(prop, host)
