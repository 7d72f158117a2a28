"""Attribute functionality: typed definitions, coercion, and freezing."""

from lookupgraph.core.attribute.models import (
    BOOLEAN,
    AttributeDef,
    Coercer,
    TypeSet,
    normalize_types,
)
from lookupgraph.core.attribute.operations import (
    build_attributes,
    coerce_value,
    freeze,
    matches_types,
    thaw,
)

__all__ = [
    # Models
    "AttributeDef",
    "BOOLEAN",
    "Coercer",
    "TypeSet",
    "normalize_types",
    # Operations
    "build_attributes",
    "coerce_value",
    "freeze",
    "matches_types",
    "thaw",
]
