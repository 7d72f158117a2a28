"""lookupgraph: typed, immutable, in-process lookup tables with associations.

Usage:
    from lookupgraph import BOOLEAN, Catalog, LoadPolicy

    catalog = Catalog()

    @catalog.declare
    def Status(t):
        t.attribute("id", int)
        t.attribute("name", str)
        t.attribute("final", BOOLEAN)
        t.has_many("orders")

    Status.register_many(
        [{"id": 1, "name": "open"}, {"id": 2, "name": "closed", "final": True}],
        policy=LoadPolicy.IMMEDIATE,
    )
    Status.find(2).is_final()       # True
    Status.find_by(name="open")     # <Status id=1, name='open', final=False>
"""

__version__ = "0.1.0"

# Configuration
from lookupgraph.config import RegistrySettings

# Core primitives
from lookupgraph.core import (
    BOOLEAN,
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
    Record,
    RegistryError,
    Schema,
    SchemaBuilder,
    SchemaError,
    UnknownAssociation,
    UnknownAttribute,
    UnknownType,
    UnrecognizedAttributes,
    UnsupportedQuery,
)

# Interop
from lookupgraph.interop import Money

# Loaders
from lookupgraph.loaders import YamlStore

# Registries
from lookupgraph.registry import (
    BelongsTo,
    Catalog,
    LoadPolicy,
    LookupType,
    RegistryState,
)

__all__ = [
    # Version
    "__version__",
    # Core
    "BOOLEAN",
    "Record",
    "Schema",
    "SchemaBuilder",
    # Registry
    "Catalog",
    "LookupType",
    "LoadPolicy",
    "RegistryState",
    "BelongsTo",
    # Config
    "RegistrySettings",
    # Interop and loaders
    "Money",
    "YamlStore",
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
