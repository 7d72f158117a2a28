"""Query functionality: argument casting and matching."""

from lookupgraph.core.query.operations import (
    cast_primary_key,
    cast_query_attrs,
    cast_query_value,
    matches,
    primary_key_attribute,
)

__all__ = [
    "cast_primary_key",
    "cast_query_attrs",
    "cast_query_value",
    "matches",
    "primary_key_attribute",
]
