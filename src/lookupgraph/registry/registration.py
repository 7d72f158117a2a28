"""Staging and commit of registrations.

A batch is fully staged (type resolution, construction, key and duplicate
checks) before anything is committed, so a failing entry never leaves a
partially populated registry behind.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from lookupgraph.core.errors import (
    AbstractTypeRegistration,
    DuplicatePrimaryKey,
    EnumLocked,
    InvalidHierarchy,
    MissingPrimaryKey,
    UnknownType,
)

if TYPE_CHECKING:
    from lookupgraph.core.record import Record
    from lookupgraph.registry.lookup_type import LookupType

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class StagedRecord:
    """A validated record and every registry it will be committed into."""

    key: Any
    record: Record
    path: tuple[LookupType, ...]


def _resolve_discriminated(owner: LookupType, name: Any) -> Any:
    """Resolve a discriminator value, cached on the owner's registry."""
    if not isinstance(name, str):
        raise UnknownType(repr(name))
    cache = owner.registry.type_cache
    if name not in cache:
        cache[name] = owner.catalog.resolve(name)
    return cache[name]


def _descends(owner: LookupType, candidate: Any, ancestor: LookupType) -> bool:
    from lookupgraph.registry.lookup_type import LookupType

    if not isinstance(candidate, LookupType):
        return False
    cache = owner.registry.ancestry_cache
    key = (candidate, ancestor)
    if key not in cache:
        cache[key] = candidate.descends_from(ancestor)
    return cache[key]


def resolve_concrete_type(
    owner: LookupType,
    raw: Mapping[str, Any],
    target_type: LookupType | None,
    allow_type_discriminator: bool,
) -> LookupType:
    """Pick the type to instantiate for one raw entry.

    Args:
        owner: Type receiving the registration.
        raw: Raw attribute mapping.
        target_type: Explicit type to instantiate (defaults to owner).
        allow_type_discriminator: Honor the discriminator attribute in raw.

    Returns:
        The concrete type.

    Raises:
        UnknownType: Discriminator names no known type.
        InvalidHierarchy: Target or resolved type outside owner's hierarchy.
        AbstractTypeRegistration: Resolved type is abstract.
    """
    target = target_type or owner
    if not _descends(owner, target, owner):
        raise InvalidHierarchy(getattr(target, "name", repr(target)), owner.name)

    concrete: Any = target
    if allow_type_discriminator:
        name = raw.get(owner.schema.discriminator)
        if name:
            concrete = _resolve_discriminated(owner, name)
    if not _descends(owner, concrete, target):
        raise InvalidHierarchy(getattr(concrete, "name", repr(concrete)), target.name)
    if concrete.schema.abstract:
        raise AbstractTypeRegistration(concrete.name)
    return concrete


def stage(
    owner: LookupType,
    entries: Iterable[Mapping[str, Any]],
    target_type: LookupType | None,
    allow_type_discriminator: bool,
    seen: dict[Any, Record] | None = None,
) -> list[StagedRecord]:
    """Validate entries without committing them.

    Args:
        owner: Type receiving the registration.
        entries: Raw attribute mappings.
        target_type: Explicit type to instantiate (defaults to owner).
        allow_type_discriminator: Honor the discriminator attribute.
        seen: Keys already staged in the same commit, shared across batches.

    Returns:
        Staged records in entry order.

    Raises:
        EnumLocked: A registry on the commit path is locked.
        MissingPrimaryKey: An entry has no primary key value.
        DuplicatePrimaryKey: Key already registered or repeated in the batch.
        Plus any construction or type resolution error.
    """
    seen = {} if seen is None else seen
    staged: list[StagedRecord] = []
    for raw in entries:
        concrete = resolve_concrete_type(owner, raw, target_type, allow_type_discriminator)
        path = concrete.lineage(up_to=owner)
        for lookup_type in path:
            if lookup_type.registry.is_locked:
                raise EnumLocked(lookup_type.name)

        record = concrete.build(raw)
        key = record.primary_key
        if key is None:
            raise MissingPrimaryKey(concrete.name, concrete.schema.primary_key, dict(raw))
        if key in seen:
            raise DuplicatePrimaryKey(owner.name, key, seen[key])
        for lookup_type in path:
            existing = lookup_type.registry.get(key)
            if existing is not None:
                raise DuplicatePrimaryKey(lookup_type.name, key, existing)

        seen[key] = record
        staged.append(StagedRecord(key=key, record=record, path=path))
    return staged


def commit(staged: Iterable[StagedRecord]) -> int:
    """Insert staged records into every registry on their path.

    Returns:
        Number of records committed.
    """
    count = 0
    for item in staged:
        for lookup_type in item.path:
            lookup_type.registry.insert(item.key, item.record)
        count += 1
    logger.debug("Committed %d records", count)
    return count
