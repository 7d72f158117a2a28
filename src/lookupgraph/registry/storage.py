"""Per-type record storage with the lock state machine.

Structure:
    _records[primary_key] = record

Storage is a plain dict while UNLOCKED and a read-only mapping once LOCKED,
so locked registries are safe for unsynchronized concurrent reads.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from enum import Enum, auto
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from lookupgraph.core.errors import EnumLocked

if TYPE_CHECKING:
    from lookupgraph.core.record import Record
    from lookupgraph.registry.lookup_type import LookupType


class RegistryState(Enum):
    """Lifecycle of a type registry. LOCKED is terminal."""

    UNLOCKED = auto()
    LOCKED = auto()


class LoadPolicy(Enum):
    """When a bulk registration is processed. Callers must pick one explicitly.

    Deferred batches surface validation and duplicate errors at lock time
    (explicit ``lock()`` or first read), not at the call site.
    """

    IMMEDIATE = auto()
    """Validate and commit now, then lock."""

    DEFERRED = auto()
    """Queue for processing at lock time; tolerates not-yet-declared STI types."""


@dataclass(frozen=True, slots=True)
class PendingBatch:
    """Raw entries queued by a deferred bulk registration."""

    entries: tuple[Mapping[str, Any], ...]
    target_type: LookupType | None
    allow_type_discriminator: bool


class TypeRegistry:
    """Primary-key indexed store of records for one declared type.

    Args:
        type_name: Name of the owning type (for error messages).
    """

    def __init__(self, type_name: str):
        self._type_name = type_name
        self._state = RegistryState.UNLOCKED
        self._records: dict[Any, Record] | MappingProxyType[Any, Record] = {}
        self._values: tuple[Record, ...] | None = None
        self._pending: list[PendingBatch] = []
        self.type_cache: dict[str, LookupType] = {}
        self.ancestry_cache: dict[tuple[LookupType, LookupType], bool] = {}
        """Resolution caches used while registering; cleared on lock:
        type_cache: discriminator value -> resolved type.
        ancestry_cache: (type, ancestor) -> descends-from result.
        """

    @property
    def state(self) -> RegistryState:
        return self._state

    @property
    def is_locked(self) -> bool:
        return self._state is RegistryState.LOCKED

    @property
    def has_pending(self) -> bool:
        return bool(self._pending)

    def get(self, key: Any) -> Record | None:
        return self._records.get(key)

    def __contains__(self, key: Any) -> bool:
        return key in self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Record]:
        return iter(self.values())

    def values(self) -> tuple[Record, ...]:
        """All records in registration order."""
        if self._values is not None:
            return self._values
        return tuple(self._records.values())

    def insert(self, key: Any, record: Record) -> None:
        """Store a record. Callers check for duplicates beforehand.

        Raises:
            EnumLocked: If the registry is locked.
        """
        if self.is_locked:
            raise EnumLocked(self._type_name)
        self._records[key] = record  # type: ignore[index]

    def defer(self, batch: PendingBatch) -> None:
        """Queue a batch for processing at lock time.

        Raises:
            EnumLocked: If the registry is locked.
        """
        if self.is_locked:
            raise EnumLocked(self._type_name)
        self._pending.append(batch)

    def pending(self) -> tuple[PendingBatch, ...]:
        return tuple(self._pending)

    def freeze(self) -> None:
        """Transition to LOCKED: freeze storage, snapshot values, drop caches."""
        if self.is_locked:
            return
        self._records = MappingProxyType(dict(self._records))
        self._values = tuple(self._records.values())
        self._pending = []
        self.type_cache.clear()
        self.ancestry_cache.clear()
        self._state = RegistryState.LOCKED
