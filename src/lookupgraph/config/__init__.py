"""Configuration module using Pydantic Settings.

Usage:
    from lookupgraph.config import RegistrySettings

    settings = RegistrySettings(data_root="data/lookups")
"""

from lookupgraph.config.settings import RegistrySettings

__all__ = [
    "RegistrySettings",
]
