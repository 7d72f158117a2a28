"""Core functionalities: schemas, records, casting rules and the error taxonomy.

Architecture Note:
    core/ holds the stateless building blocks: attribute definitions and
    coercion, association declarations, query casting, schemas and records.
    Registries, locking and name resolution live in registry/.
"""

from lookupgraph.core.association import Association, AssociationKind
from lookupgraph.core.attribute import BOOLEAN, AttributeDef, freeze, thaw
from lookupgraph.core.errors import (
    AbstractTypeRegistration,
    AmbiguousSource,
    AttributeTypeError,
    CoercionTypeMismatch,
    DuplicatePrimaryKey,
    EnumLocked,
    EnumNotReady,
    IncompatibleKeyType,
    InvalidHierarchy,
    LoaderError,
    MissingPrimaryKey,
    NotAnAssociableType,
    NotFound,
    RegistryError,
    SchemaError,
    UnknownAssociation,
    UnknownAttribute,
    UnknownType,
    UnrecognizedAttributes,
    UnsupportedQuery,
)
from lookupgraph.core.record import Record
from lookupgraph.core.schema import Schema, SchemaBuilder

__all__ = [
    # Models
    "Association",
    "AssociationKind",
    "AttributeDef",
    "BOOLEAN",
    "Record",
    "Schema",
    "SchemaBuilder",
    # Operations
    "freeze",
    "thaw",
    # Errors
    "RegistryError",
    "SchemaError",
    "EnumLocked",
    "EnumNotReady",
    "MissingPrimaryKey",
    "DuplicatePrimaryKey",
    "UnknownType",
    "InvalidHierarchy",
    "AbstractTypeRegistration",
    "AttributeTypeError",
    "CoercionTypeMismatch",
    "UnrecognizedAttributes",
    "UnknownAttribute",
    "IncompatibleKeyType",
    "UnsupportedQuery",
    "NotFound",
    "NotAnAssociableType",
    "UnknownAssociation",
    "LoaderError",
    "AmbiguousSource",
]
