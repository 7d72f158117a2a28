"""Loaders registering lookup records from seed data files."""

from lookupgraph.core.errors import AmbiguousSource, LoaderError
from lookupgraph.loaders.yaml_store import YamlStore, read_entries

__all__ = [
    "AmbiguousSource",
    "LoaderError",
    "YamlStore",
    "read_entries",
]
