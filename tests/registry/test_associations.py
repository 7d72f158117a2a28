"""Tests for association navigation."""

import pytest

from lookupgraph import (
    Catalog,
    LoadPolicy,
    NotAnAssociableType,
    UnknownAssociation,
    UnknownAttribute,
    UnknownType,
)


@pytest.fixture
def graph(catalog):
    """Foo has many Bars, each Bar has many Bazs and one Qux."""

    @catalog.declare
    def Foo(t):
        t.attribute("id", int)
        t.has_many("bars")
        t.has_many("bazs", through="bars")
        t.has_one("favorite_bar", type_name="Bar", foreign_key="favorite_of_id")

    @catalog.declare
    def Bar(t):
        t.attribute("id", int)
        t.attribute("foo_id", int)
        t.attribute("favorite_of_id", int)
        t.belongs_to("foo")
        t.has_many("bazs")
        t.has_one("qux")

    @catalog.declare
    def Baz(t):
        t.attribute("id", int)
        t.attribute("bar_id", int)
        t.belongs_to("bar")
        t.has_one("foo", through="bar")

    @catalog.declare
    def Qux(t):
        t.attribute("id", int)
        t.attribute("bar_id", int)

    Foo.register_many([{"id": 1}, {"id": 2}], policy=LoadPolicy.IMMEDIATE)
    Bar.register_many(
        [
            {"id": 10, "foo_id": 1, "favorite_of_id": 1},
            {"id": 11, "foo_id": 1},
            {"id": 12, "foo_id": None},
        ],
        policy=LoadPolicy.IMMEDIATE,
    )
    Baz.register_many(
        [
            {"id": 100, "bar_id": 10},
            {"id": 101, "bar_id": 11},
            {"id": 102, "bar_id": 11},
            {"id": 103, "bar_id": 12},
        ],
        policy=LoadPolicy.IMMEDIATE,
    )
    Qux.register_many([{"id": 7, "bar_id": 11}], policy=LoadPolicy.IMMEDIATE)
    return catalog


def test_belongs_to(graph):
    bar = graph["Bar"].find(10)

    assert bar.foo() is graph["Foo"].find(1)
    assert graph["Bar"].find(12).foo() is None


def test_has_many(graph):
    foo = graph["Foo"].find(1)

    assert [b.primary_key for b in foo.bars()] == [10, 11]
    assert graph["Foo"].find(2).bars() == ()


def test_has_one(graph):
    bars = graph["Bar"]

    assert bars.find(11).qux().primary_key == 7
    assert bars.find(10).qux() is None
    assert graph["Foo"].find(1).favorite_bar().primary_key == 10


def test_has_many_through_flattens(graph):
    foo = graph["Foo"].find(1)

    assert [b.primary_key for b in foo.bazs()] == [100, 101, 102]
    assert graph["Foo"].find(2).bazs() == ()


def test_has_one_through(graph):
    assert graph["Baz"].find(101).foo() is graph["Foo"].find(1)
    assert graph["Baz"].find(103).foo() is None


def test_related_by_name(graph):
    bar = graph["Bar"].find(11)

    assert bar.related("foo") is bar.foo()
    with pytest.raises(UnknownAssociation, match="'owner'"):
        bar.related("owner")


def test_results_are_recomputed_from_live_registries(catalog):
    """Association results are never cached on the record."""

    @catalog.declare
    def Parent(t):
        t.attribute("id", int)
        t.has_many("children")

    @catalog.declare
    def Child(t):
        t.attribute("id", int)
        t.attribute("parent_id", int)

    Parent.register_many([{"id": 1}], policy=LoadPolicy.IMMEDIATE)
    Child.register_many([{"id": 1, "parent_id": 1}], policy=LoadPolicy.DEFERRED)
    parent = Parent.find(1)

    assert [c.primary_key for c in parent.children()] == [1]


def test_target_declared_after_owner(catalog):
    @catalog.declare
    def Order(t):
        t.attribute("id", int)
        t.attribute("status_id", int)
        t.belongs_to("status")

    Order.register_many([{"id": 1, "status_id": 3}], policy=LoadPolicy.IMMEDIATE)
    order = Order.find(1)

    with pytest.raises(UnknownType, match="Status"):
        order.status()

    @catalog.declare
    def Status(t):
        t.attribute("id", int)

    Status.register_many([{"id": 3}], policy=LoadPolicy.IMMEDIATE)
    assert order.status() is Status.find(3)


def test_missing_foreign_key_attribute(catalog):
    @catalog.declare
    def Owner(t):
        t.attribute("id", int)
        t.has_many("pets")

    @catalog.declare
    def Pet(t):
        t.attribute("id", int)

    Owner.register_many([{"id": 1}], policy=LoadPolicy.IMMEDIATE)
    Pet.lock()

    with pytest.raises(UnknownAttribute, match="owner_id"):
        Owner.find(1).pets()


def test_target_must_be_a_lookup_type_of_the_same_catalog(settings):
    other = Catalog(settings=settings)
    foreign = other.define("Plain", lambda t: t.attribute("id", int))
    namespace = {"Plain": foreign, "Widget": object()}
    catalog = Catalog(settings=settings, resolver=namespace.get)

    @catalog.declare
    def Pointer(t):
        t.attribute("id", int)
        t.attribute("plain_id", int)
        t.attribute("widget_id", int)
        t.belongs_to("plain")
        t.belongs_to("widget")

    Pointer.register_many(
        [{"id": 1, "plain_id": 1, "widget_id": 1}], policy=LoadPolicy.IMMEDIATE
    )
    pointer = Pointer.find(1)

    with pytest.raises(NotAnAssociableType, match="Pointer.plain"):
        pointer.plain()
    with pytest.raises(NotAnAssociableType, match="Pointer.widget"):
        pointer.widget()
