"""Tests for property derivation."""

from resprops import DefaultKind, DeprecationKind, define_property, lazy


def test_derive_with_default_strips_name_property(notices, host):
    base = define_property(name="path", kind_of=str, name_property=True)

    derived = base.derive(default="/tmp")

    assert derived.default_kind is DefaultKind.STATIC
    assert not derived.is_name_property
    assert derived.get(host) == "/tmp"
    assert notices.notices == []


def test_derive_with_name_property_strips_default(notices, host):
    base = define_property(name="path", kind_of=str, default="/tmp")

    derived = base.derive(name_property=True)

    assert derived.default_kind is DefaultKind.NAME_PROPERTY
    assert "default" not in derived.options
    assert derived.get(host) == "web"
    assert notices.notices == []


def test_derive_with_name_attribute_strips_default():
    base = define_property(name="path", default=lazy(lambda: "x"))

    derived = base.derive(name_attribute=True)

    assert derived.default_kind is DefaultKind.NAME_PROPERTY


def test_derive_without_default_options_keeps_default():
    base = define_property(name="mode", kind_of=str, default="0644")

    derived = base.derive(required=True, identity=True)

    assert derived.default_kind is DefaultKind.STATIC
    assert derived.default == "0644"
    assert derived.is_identity
    assert derived.validation_rules["kind_of"] is str


def test_derive_leaves_original_untouched():
    base = define_property(name="mode", default="0644")

    base.derive(name="other", default="0755")

    assert base.name == "mode"
    assert base.default == "0644"


def test_derive_binds_property_type_to_name(host):
    mode_type = define_property(kind_of=str, regex=r"^0?[0-7]{3}$")

    mode = mode_type.derive(name="mode", default="0644")

    assert mode.storage_slot == "mode"
    assert mode.get(host) == "0644"
    assert host.property_state.get("mode") == "0644"


def test_derive_revalidates_new_default(notices):
    base = define_property(name="port", kind_of=int, default=80)

    base.derive(default="eighty")

    assert notices.kinds() == [DeprecationKind.INVALID_DEFAULT]
