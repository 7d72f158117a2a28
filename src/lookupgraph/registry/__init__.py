"""Registry functionality: lookup types, locking, querying and navigation."""

from lookupgraph.registry.catalog import Catalog
from lookupgraph.registry.descriptors import BelongsTo
from lookupgraph.registry.lookup_type import LookupType
from lookupgraph.registry.storage import LoadPolicy, RegistryState, TypeRegistry

__all__ = [
    # Models
    "Catalog",
    "LookupType",
    "LoadPolicy",
    "RegistryState",
    "TypeRegistry",
    # Host integration
    "BelongsTo",
]
