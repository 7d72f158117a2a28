"""Tests for attribute definitions, coercion and freezing."""

from datetime import date
from types import MappingProxyType

import pytest
from hypothesis import given
from hypothesis import strategies as st

from lookupgraph.core.attribute import (
    BOOLEAN,
    AttributeDef,
    build_attributes,
    coerce_value,
    freeze,
    matches_types,
    normalize_types,
    thaw,
)
from lookupgraph.core.errors import (
    AttributeTypeError,
    CoercionTypeMismatch,
    SchemaError,
    UnrecognizedAttributes,
)


@pytest.fixture
def attribute_set():
    return {
        "id": AttributeDef("id", int),
        "name": AttributeDef("name", str),
        "enabled": AttributeDef("enabled", BOOLEAN),
        "starts_on": AttributeDef("starts_on", date, coercer=date.fromisoformat),
    }


def test_normalize_types_accepts_single_type_and_iterables():
    assert normalize_types(int) == (int,)
    assert normalize_types([str, int]) == (str, int)


@pytest.mark.parametrize("bad", [(), ["int"], [int, 3]])
def test_normalize_types_rejects_empty_or_non_types(bad):
    with pytest.raises(TypeError):
        normalize_types(bad)


def test_attribute_def_reader_and_boolean_flags():
    assert AttributeDef("enabled", BOOLEAN).is_boolean
    assert not AttributeDef("flag", (bool, int)).is_boolean
    assert AttributeDef("name", str, reader="label").reader_name == "label"
    assert AttributeDef("name", str).reader_name == "name"
    assert repr(AttributeDef("code", (str, int))) == "code: str|int"


def test_bool_does_not_satisfy_int_only_type_set():
    """CRITICAL: True is an int in Python but not a valid int attribute value.

    Why: otherwise {"id": True} would register under key 1.
    """
    assert not matches_types(True, (int,))
    assert matches_types(True, (bool, int))
    assert matches_types(3, (int,))


def test_boolean_defaults_to_false_and_other_attributes_to_none(attribute_set):
    attrs = build_attributes("Foo", attribute_set, {"id": 1})

    assert attrs["enabled"] is False
    assert attrs["name"] is None
    assert attrs["starts_on"] is None
    assert set(attrs) == set(attribute_set)


def test_explicit_none_for_boolean_becomes_false(attribute_set):
    attrs = build_attributes("Foo", attribute_set, {"id": 1, "enabled": None})
    assert attrs["enabled"] is False


def test_coercer_applies_to_mismatched_values(attribute_set):
    attrs = build_attributes("Foo", attribute_set, {"id": 1, "starts_on": "2020-02-03"})
    assert attrs["starts_on"] == date(2020, 2, 3)


def test_coercer_not_applied_to_matching_values():
    calls = []

    def coercer(value):
        calls.append(value)
        return str(value)

    attr = AttributeDef("name", str, coercer=coercer)
    assert coerce_value("Foo", attr, "x") == "x"
    assert calls == []


def test_coercer_producing_wrong_type_raises():
    attr = AttributeDef("id", int, coercer=lambda v: v.upper())

    with pytest.raises(CoercionTypeMismatch) as info:
        coerce_value("Foo", attr, "abc")

    assert info.value.attribute == "id"
    assert "ABC" in str(info.value)


def test_wrong_type_without_coercer_raises(attribute_set):
    with pytest.raises(AttributeTypeError, match="Foo"):
        build_attributes("Foo", attribute_set, {"id": "1"})


def test_unknown_keys_are_rejected(attribute_set):
    with pytest.raises(UnrecognizedAttributes) as info:
        build_attributes("Foo", attribute_set, {"id": 1, "colour": "red", "size": 2})

    assert set(info.value.keys) == {"colour", "size"}


def test_empty_attribute_set_is_a_schema_error():
    with pytest.raises(SchemaError, match="no attributes defined"):
        build_attributes("Empty", {}, {})


def test_values_are_deep_frozen():
    attrs = build_attributes(
        "Foo",
        {"id": AttributeDef("id", int), "tags": AttributeDef("tags", (list, tuple))},
        {"id": 1, "tags": ["a", ["b", {"c": [1]}]]},
    )

    tags = attrs["tags"]
    assert tags == ("a", ("b", MappingProxyType({"c": (1,)})))
    with pytest.raises(TypeError):
        tags[1][1]["c"] = 2  # type: ignore[index]
    with pytest.raises(TypeError):
        attrs["id"] = 2  # type: ignore[index]


def test_freeze_and_thaw_containers():
    frozen = freeze({"a": [1, {2, 3}], "b": bytearray(b"x")})

    assert isinstance(frozen, MappingProxyType)
    assert frozen["a"] == (1, frozenset({2, 3}))
    assert frozen["b"] == b"x"
    assert thaw(frozen) == {"a": [1, {2, 3}], "b": b"x"}


@given(value=st.one_of(st.none(), st.just(False)))
def test_missing_boolean_is_always_false(value):
    """PROPERTY: a bool-only attribute given None or False stores exactly False."""
    attrs = build_attributes(
        "Flagged",
        {"id": AttributeDef("id", int), "on": AttributeDef("on", BOOLEAN)},
        {"id": 1, "on": value},
    )
    assert attrs["on"] is False


@given(raw=st.dictionaries(st.sampled_from(["id", "name"]), st.integers() | st.text()))
def test_construction_is_all_or_nothing(raw):
    """PROPERTY: construction either yields every attribute or raises."""
    attribute_set = {"id": AttributeDef("id", (int, str)), "name": AttributeDef("name", (int, str))}

    attrs = build_attributes("Foo", attribute_set, raw)

    assert set(attrs) == {"id", "name"}
    for key, value in raw.items():
        assert attrs[key] == value
