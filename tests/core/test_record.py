"""Tests for immutable records."""

import pytest

from lookupgraph import BOOLEAN


@pytest.fixture
def record(locked_foo):
    return locked_foo.find(1)


def test_record_is_a_read_only_mapping(record):
    assert record["name"] == "first"
    assert dict(record) == {"id": 1, "name": "first", "enabled": True}
    assert len(record) == 3
    with pytest.raises(TypeError):
        record["name"] = "changed"  # type: ignore[index]


def test_record_attributes_can_not_be_assigned(record):
    with pytest.raises(AttributeError, match="immutable"):
        record.name = "changed"
    with pytest.raises(AttributeError):
        del record.name


def test_attribute_readers_and_boolean_predicates(locked_foo):
    first, second = locked_foo.find(1), locked_foo.find(2)

    assert first.name == "first"
    assert first.is_enabled() is True
    assert second.is_enabled() is False


def test_unknown_attribute_access_raises_attribute_error(record):
    with pytest.raises(AttributeError, match="colour"):
        record.colour
    with pytest.raises(AttributeError):
        record.is_name()


def test_custom_reader_name(catalog):
    @catalog.declare
    def Label(t):
        t.attribute("id", int)
        t.attribute("class", str, reader="css_class")

    record = Label.build({"id": 1, "class": "warn"})

    assert record.css_class == "warn"
    assert record["class"] == "warn"


def test_equality_and_hash(foo_type):
    a = foo_type.build(id=1, name="x")
    b = foo_type.build({"id": 1, "name": "x"})
    c = foo_type.build(id=1, name="y")

    assert a == b
    assert hash(a) == hash(b)
    assert a != c
    assert {a, b} == {a}


def test_records_of_different_types_are_never_equal(catalog):
    @catalog.declare
    def A(t):
        t.attribute("id", int)

    @catalog.declare
    def B(t):
        t.attribute("id", int)

    assert A.build(id=1) != B.build(id=1)


def test_host_integration_surface(record):
    assert record.primary_key == 1
    assert record.to_key() == (1,)
    assert record.persisted
    assert not record.new_record
    assert record.lookup_type.name == "Foo"


def test_to_dict_returns_plain_mutable_copy(catalog):
    @catalog.declare
    def Tagged(t):
        t.attribute("id", int)
        t.attribute("tags", (list, tuple))
        t.attribute("hidden", BOOLEAN)

    record = Tagged.build(id=1, tags=["a", "b"])
    data = record.to_dict()

    assert data == {"id": 1, "tags": ["a", "b"], "hidden": False}
    data["tags"].append("c")
    assert record["tags"] == ("a", "b")


def test_repr_and_dir(record):
    assert repr(record) == "<Foo id=1, name='first', enabled=True>"
    assert {"name", "is_enabled"} <= set(dir(record))
