"""Configuration settings using Pydantic Settings.

Provides typed registry configuration with environment variable support.

Usage:
    from lookupgraph.config import RegistrySettings

    # Load from environment variables (LOOKUPGRAPH_*)
    settings = RegistrySettings()

    # Or override with explicit values
    settings = RegistrySettings(data_root="data/lookups", deferred_lock_delay=0.5)
    catalog = Catalog(settings=settings)
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RegistrySettings(BaseSettings):  # type: ignore[misc]
    """Configuration for a catalog of lookup types.

    Attributes:
        primary_key: Default primary key attribute for root types.
        discriminator: Default STI discriminator attribute for root types.
        data_root: Directory holding YAML seed files (None disables file loading).
        deferred_lock_delay: Seconds a background task waits before locking a
            deferred STI batch. None (default) disables the background lock;
            types then lock explicitly or at first read.
        memoize_money: Cache derived Money values per record.
        default_currency: Currency for money accessors that don't name one.

    Environment Variables:
        LOOKUPGRAPH_PRIMARY_KEY
        LOOKUPGRAPH_DISCRIMINATOR
        LOOKUPGRAPH_DATA_ROOT
        LOOKUPGRAPH_DEFERRED_LOCK_DELAY
        LOOKUPGRAPH_MEMOIZE_MONEY
        LOOKUPGRAPH_DEFAULT_CURRENCY
    """

    model_config = SettingsConfigDict(
        env_prefix="LOOKUPGRAPH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    primary_key: str = "id"
    discriminator: str = "type"
    data_root: Path | None = None
    deferred_lock_delay: float | None = Field(default=None, ge=0.0)
    memoize_money: bool = True
    default_currency: str = "USD"
