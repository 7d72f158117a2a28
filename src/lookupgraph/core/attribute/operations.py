"""Pure functions for type checking, coercion, and deep freezing.

Record construction is a pure function of the raw mapping and the
attribute set: nothing here touches registry state.
"""

from __future__ import annotations

from collections.abc import Mapping, Set
from types import MappingProxyType
from typing import Any

from lookupgraph.core.attribute.models import AttributeDef, TypeSet
from lookupgraph.core.errors import (
    AttributeTypeError,
    CoercionTypeMismatch,
    SchemaError,
    UnrecognizedAttributes,
)


def matches_types(value: Any, types: TypeSet) -> bool:
    """Check a value against a type set.

    ``bool`` subclasses ``int`` in Python; booleans only satisfy a type set
    that names ``bool`` explicitly.

    Args:
        value: Value to check.
        types: Acceptable types.

    Returns:
        True if value is an instance of one of the types.
    """
    if isinstance(value, bool) and bool not in types:
        return False
    return isinstance(value, types)


def freeze(value: Any) -> Any:
    """Recursively convert containers to immutable equivalents.

    Lists and tuples become tuples, mappings become read-only mappings,
    sets become frozensets and bytearrays become bytes. Other values are
    returned unchanged.
    """
    if isinstance(value, (str, bytes, int, float)) or value is None:
        return value
    if isinstance(value, Mapping):
        return MappingProxyType({k: freeze(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(v) for v in value)
    if isinstance(value, Set):
        return frozenset(freeze(v) for v in value)
    if isinstance(value, bytearray):
        return bytes(value)
    return value


def thaw(value: Any) -> Any:
    """Convert frozen containers back to plain lists and dicts (for serialization)."""
    if isinstance(value, Mapping):
        return {k: thaw(v) for k, v in value.items()}
    if isinstance(value, tuple):
        return [thaw(v) for v in value]
    if isinstance(value, frozenset):
        return {thaw(v) for v in value}
    return value


def coerce_value(type_name: str, attr: AttributeDef, value: Any) -> Any:
    """Type-check or coerce one supplied value.

    Args:
        type_name: Name of the declared type (for error messages).
        attr: Attribute definition.
        value: Supplied value, or None when absent.

    Returns:
        The value, its coerced form, or the attribute's default.

    Raises:
        AttributeTypeError: Wrong type and no coercer.
        CoercionTypeMismatch: Coercer produced a value of the wrong type.
    """
    if value is None:
        return False if attr.is_boolean else None
    if matches_types(value, attr.types):
        return value
    if attr.coercer is not None:
        coerced = attr.coercer(value)
        if not matches_types(coerced, attr.types):
            raise CoercionTypeMismatch(type_name, attr.name, value, coerced, attr.types)
        return coerced
    raise AttributeTypeError(type_name, attr.name, value, attr.types)


def build_attributes(
    type_name: str,
    attribute_set: Mapping[str, AttributeDef],
    raw: Mapping[str, Any],
) -> MappingProxyType[str, Any]:
    """Build the frozen attribute mapping of a record.

    Args:
        type_name: Name of the declared type (for error messages).
        attribute_set: Full attribute set of the type, inherited ones included.
        raw: Raw attribute mapping.

    Returns:
        Read-only mapping with exactly one entry per defined attribute.

    Raises:
        SchemaError: If the type defines no attributes.
        UnrecognizedAttributes: If raw carries unknown keys.
        AttributeTypeError: See coerce_value.
        CoercionTypeMismatch: See coerce_value.
    """
    if not attribute_set:
        raise SchemaError(f"no attributes defined for {type_name}")
    unknown = [key for key in raw if key not in attribute_set]
    if unknown:
        raise UnrecognizedAttributes(type_name, unknown)

    values = {
        name: freeze(coerce_value(type_name, attr, raw.get(name)))
        for name, attr in attribute_set.items()
    }
    return MappingProxyType(values)
