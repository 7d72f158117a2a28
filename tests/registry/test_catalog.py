"""Tests for declaring and resolving types through a Catalog."""

import pytest

from lookupgraph import (
    Catalog,
    LoadPolicy,
    LookupType,
    RegistrySettings,
    SchemaError,
    UnknownType,
)


def test_declare_forms(catalog):
    @catalog.declare
    def Bare(t):
        t.attribute("id", int)

    @catalog.declare()
    def Called(t):
        t.attribute("id", int)

    @catalog.declare("Named")
    def named(t):
        t.attribute("id", int)

    assert isinstance(Bare, LookupType)
    assert (Bare.name, Called.name, named.name) == ("Bare", "Called", "Named")
    assert catalog.types() == (Bare, Called, named)
    assert "Named" in catalog
    assert len(catalog) == 3


def test_define_without_build_function(catalog):
    Shape = catalog.define("Shape", lambda t: t.attribute("id", int))
    Blank = catalog.define("Blank", parent=Shape)

    assert list(Blank.schema.attributes) == ["id"]


def test_duplicate_type_name(catalog):
    catalog.define("Foo", lambda t: t.attribute("id", int))

    with pytest.raises(SchemaError, match="already declared"):
        catalog.define("Foo", lambda t: t.attribute("id", int))


def test_parent_from_another_catalog_is_rejected(catalog, settings):
    other = Catalog(settings=settings)
    foreign = other.define("Base", lambda t: t.attribute("id", int))

    with pytest.raises(SchemaError, match="another catalog"):
        catalog.define("Child", parent=foreign)


def test_resolve_and_getitem(catalog):
    Foo = catalog.define("Foo", lambda t: t.attribute("id", int))

    assert catalog.resolve("Foo") is Foo
    assert catalog["Foo"] is Foo
    with pytest.raises(UnknownType):
        catalog.resolve("Nope")
    with pytest.raises(UnknownType):
        catalog["Nope"]


def test_settings_drive_root_defaults():
    catalog = Catalog(settings=RegistrySettings(primary_key="code", discriminator="kind"))

    @catalog.declare
    def Country(t):
        t.attribute("code", str)
        t.attribute("kind", str)

    @catalog.declare(parent=Country)
    def Island(t):
        pass

    assert Country.schema.primary_key == "code"
    assert Island.schema.discriminator == "kind"

    Country.register_many(
        [{"code": "MT", "kind": "Island"}],
        policy=LoadPolicy.IMMEDIATE,
        allow_type_discriminator=True,
    )
    assert Island.find("MT").lookup_type is Island


def test_lock_all_locks_every_type(catalog):
    Foo = catalog.define("Foo", lambda t: t.attribute("id", int))
    Sub = catalog.define("Sub", parent=Foo)
    Bar = catalog.define("Bar", lambda t: t.attribute("id", int))
    Bar.register_many([{"id": 1}], policy=LoadPolicy.DEFERRED)

    catalog.lock_all()

    assert all(t.is_locked for t in (Foo, Sub, Bar))
    assert Bar.find(1).primary_key == 1
    assert list(catalog) == [Foo, Sub, Bar]
    assert catalog.roots() == (Foo, Bar)


def test_table_name(catalog):
    assert catalog.define("OrderStatus", lambda t: t.attribute("id", int)).table_name == (
        "order_statuses"
    )
