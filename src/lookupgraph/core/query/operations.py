"""Casting of query arguments to the types records are stored with.

Lets callers write ``find_by(id="1")`` or ``where(kind="gold")`` against
integer or enum attributes, the way request parameters usually arrive.
"""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any

from lookupgraph.core.attribute import AttributeDef
from lookupgraph.core.errors import (
    IncompatibleKeyType,
    SchemaError,
    UnknownAttribute,
    UnsupportedQuery,
)


def _exact_match(value: Any, attr: AttributeDef) -> bool:
    return type(value) in attr.types


def _single_enum(attr: AttributeDef) -> type[Enum] | None:
    if len(attr.types) == 1 and issubclass(attr.types[0], Enum):
        return attr.types[0]
    return None


def _cast_enum(enum_type: type[Enum], value: Any) -> Enum:
    try:
        return enum_type(value)
    except ValueError:
        if isinstance(value, str) and value in enum_type.__members__:
            return enum_type[value]
        raise


def _cast_int(value: Any) -> int:
    if isinstance(value, bool):
        raise TypeError(f"refusing to cast {value!r} to int")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"{value!r} is not integral")
        return int(value)
    if isinstance(value, (str, bytes, int, Decimal)):
        return int(value)
    raise TypeError(f"can't cast {type(value).__name__} to int")


def _is_truthy(value: Any) -> bool:
    # Only None and False are false; "0", 0 and "f" are all true.
    return not (value is None or value is False)


def cast_primary_key(type_name: str, attr: AttributeDef, value: Any) -> Any:
    """Cast an id-like value to the type used to index the registry.

    Args:
        type_name: Declared type name (for error messages).
        attr: Primary key attribute definition.
        value: Raw key.

    Returns:
        The cast key, or None for None.

    Raises:
        IncompatibleKeyType: If no cast rule applies or the cast fails.
    """
    if value is None:
        return None
    if _exact_match(value, attr):
        return value
    try:
        if attr.types == (int,):
            return _cast_int(value)
        if attr.types == (str,):
            return str(value)
        enum_type = _single_enum(attr)
        if enum_type is not None:
            return _cast_enum(enum_type, value)
    except (TypeError, ValueError) as e:
        raise IncompatibleKeyType(type_name, attr.name, value, attr.types) from e
    raise IncompatibleKeyType(type_name, attr.name, value, attr.types)


def cast_query_value(type_name: str, attr: AttributeDef, value: Any) -> Any:
    """Cast one query value to its attribute's stored type.

    Raises:
        UnsupportedQuery: For list, tuple or set values.
        IncompatibleKeyType: If no cast rule applies or the cast fails.
    """
    if isinstance(value, (list, tuple, set, frozenset)):
        raise UnsupportedQuery(type_name, attr.name, value)
    if _exact_match(value, attr):
        return value
    if value is None and not attr.is_boolean:
        return None
    try:
        if attr.types == (str,):
            return str(value)
        if attr.types == (int,):
            if isinstance(value, str) and value == "":
                return None
            return _cast_int(value)
        if attr.is_boolean:
            return _is_truthy(value)
        if attr.types == (Decimal,):
            return Decimal(str(value))
        if attr.types == (float,):
            if isinstance(value, bool):
                raise TypeError(f"refusing to cast {value!r} to float")
            return float(value)
        enum_type = _single_enum(attr)
        if enum_type is not None:
            return _cast_enum(enum_type, value)
    except (TypeError, ValueError, InvalidOperation) as e:
        raise IncompatibleKeyType(type_name, attr.name, value, attr.types) from e
    raise IncompatibleKeyType(type_name, attr.name, value, attr.types)


def cast_query_attrs(
    type_name: str,
    attribute_set: Mapping[str, AttributeDef],
    raw: Mapping[str, Any],
) -> dict[str, Any]:
    """Cast every query argument; any failure fails the whole query.

    Raises:
        UnknownAttribute: If a key is not an attribute of the type.
        UnsupportedQuery: See cast_query_value.
        IncompatibleKeyType: See cast_query_value.
    """
    cast: dict[str, Any] = {}
    for key, value in raw.items():
        attr = attribute_set.get(key)
        if attr is None:
            raise UnknownAttribute(type_name, key)
        cast[key] = cast_query_value(type_name, attr, value)
    return cast


def matches(attributes: Mapping[str, Any], criteria: Mapping[str, Any]) -> bool:
    """Exact equality on every criterion (no containment)."""
    for key, expected in criteria.items():
        actual = attributes[key]
        if type(actual) is bool or type(expected) is bool:
            if actual is not expected:
                return False
        elif actual != expected:
            return False
    return True


def primary_key_attribute(
    type_name: str, attribute_set: Mapping[str, AttributeDef], primary_key: str
) -> AttributeDef:
    """Look up the primary key definition.

    Raises:
        SchemaError: If the type does not define its primary key attribute.
    """
    attr = attribute_set.get(primary_key)
    if attr is None:
        raise SchemaError(f"no {primary_key!r} attribute defined on {type_name}")
    return attr
