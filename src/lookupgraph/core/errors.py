"""Error taxonomy for lookup registries.

Every error reflects a declaration mistake or a genuine absence of data, so
nothing here is retried. Errors carry the offending type name, attribute
names and input values as attributes for diagnosis.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any


class RegistryError(Exception):
    """Base class for all lookup registry errors."""

    pass


class SchemaError(RegistryError, ValueError):
    """Raised when a type declaration is inconsistent."""

    pass


# Lock state machine


class EnumLocked(RegistryError):
    """Raised when writing to a registry after it has been locked."""

    def __init__(self, type_name: str):
        self.type_name = type_name
        super().__init__(f"{type_name} has been locked and can not be written to")


class EnumNotReady(RegistryError):
    """Raised when reading a registry that was never locked or populated."""

    def __init__(self, type_name: str):
        self.type_name = type_name
        super().__init__(f"Cannot use unlocked lookup type {type_name}")


# Registration


class MissingPrimaryKey(RegistryError):
    """Raised when a registered record has no primary key value."""

    def __init__(self, type_name: str, primary_key: str, attributes: dict[str, Any]):
        self.type_name = type_name
        self.primary_key = primary_key
        self.attributes = attributes
        super().__init__(f"{type_name} must provide {primary_key!r} (got {attributes!r})")


class DuplicatePrimaryKey(RegistryError):
    """Raised when a primary key is registered twice within one registry."""

    def __init__(self, type_name: str, key: Any, existing: Any):
        self.type_name = type_name
        self.key = key
        self.existing = existing
        super().__init__(f"{type_name} already registered id {key!r}: {existing!r}")


class UnknownType(RegistryError):
    """Raised when a type name cannot be resolved."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown lookup type {name!r}")


class InvalidHierarchy(RegistryError):
    """Raised when a resolved type does not descend from the expected type."""

    def __init__(self, type_name: str, expected: str):
        self.type_name = type_name
        self.expected = expected
        super().__init__(f"Specified type {type_name} must derive from {expected}")


class AbstractTypeRegistration(RegistryError):
    """Raised when registering an instance of an abstract type."""

    def __init__(self, type_name: str):
        self.type_name = type_name
        super().__init__(f"{type_name} is abstract and can not have instances")


# Construction


class AttributeTypeError(RegistryError, TypeError):
    """Raised when a value has the wrong type and the attribute has no coercer."""

    def __init__(self, type_name: str, attribute: str, value: Any, types: tuple[type, ...]):
        self.type_name = type_name
        self.attribute = attribute
        self.value = value
        self.types = types
        super().__init__(
            f"Attribute {type_name}.{attribute} passed {value!r}:{type(value).__name__} "
            f"in initializer, but needs {_type_names(types)} and has no coercer"
        )


class CoercionTypeMismatch(RegistryError, TypeError):
    """Raised when a coercer returns a value outside the attribute's type set."""

    def __init__(
        self,
        type_name: str,
        attribute: str,
        value: Any,
        coerced: Any,
        types: tuple[type, ...],
    ):
        self.type_name = type_name
        self.attribute = attribute
        self.value = value
        self.coerced = coerced
        self.types = types
        super().__init__(
            f"coercer for {type_name}.{attribute} failed to coerce {value!r} to one of "
            f"{_type_names(types)}. Got {coerced!r}:{type(coerced).__name__} instead"
        )


class UnrecognizedAttributes(RegistryError):
    """Raised when a raw mapping carries keys outside the attribute set."""

    def __init__(self, type_name: str, keys: Iterable[Any]):
        self.type_name = type_name
        self.keys = tuple(keys)
        super().__init__(f"unrecognized attributes for {type_name}: {list(self.keys)!r}")


# Querying


class UnknownAttribute(RegistryError):
    """Raised when querying by a name that is not an attribute."""

    def __init__(self, type_name: str, attribute: Any):
        self.type_name = type_name
        self.attribute = attribute
        super().__init__(f"{attribute!r} is not an attribute of {type_name}")


class IncompatibleKeyType(RegistryError, TypeError):
    """Raised when a query value can not be cast to the attribute's type set."""

    def __init__(self, type_name: str, attribute: str, value: Any, types: tuple[type, ...]):
        self.type_name = type_name
        self.attribute = attribute
        self.value = value
        self.types = types
        super().__init__(
            f"incompatible type for {type_name}.{attribute}: got "
            f"{value!r}:{type(value).__name__}, need {_type_names(types)} "
            "or something castable to that"
        )


class UnsupportedQuery(RegistryError):
    """Raised for query arguments the engine does not support (sequences)."""

    def __init__(self, type_name: str, attribute: str, value: Any):
        self.type_name = type_name
        self.attribute = attribute
        self.value = value
        super().__init__(
            f"{type_name} can't query with array arguments. Got {attribute}={value!r}"
        )


class NotFound(RegistryError, LookupError):
    """Raised by find-style lookups when no record matches."""

    def __init__(self, type_name: str, criteria: dict[str, Any]):
        self.type_name = type_name
        self.criteria = criteria
        super().__init__(f"Couldn't find {type_name} with {criteria!r}")


# Associations


class NotAnAssociableType(RegistryError):
    """Raised when an association target is outside the owner's catalog."""

    def __init__(self, owner: str, association: str, target: Any):
        self.owner = owner
        self.association = association
        self.target = target
        super().__init__(
            f"{owner}.{association} can only associate to lookup types of the same "
            f"catalog. {target!r} is not one."
        )


class UnknownAssociation(RegistryError):
    """Raised when navigating an association that was never declared."""

    def __init__(self, type_name: str, association: str):
        self.type_name = type_name
        self.association = association
        super().__init__(f"{type_name} has no association {association!r}")


# Loading


class LoaderError(RegistryError):
    """Raised when seed data can't be located or read."""


class AmbiguousSource(LoaderError):
    """Raised when both a data file and a data directory match a type."""

    def __init__(self, type_name: str, file: Any, directory: Any):
        self.type_name = type_name
        self.file = file
        self.directory = directory
        super().__init__(
            f"{type_name} values should be defined in {file} or {directory}, not both"
        )


def _type_names(types: tuple[type, ...]) -> str:
    return "[" + ", ".join(t.__name__ for t in types) + "]"
