"""Association navigation against live registries.

Results are computed on every call from the target registries, never cached
on the record. To-one associations return a Record or None, to-many ones a
tuple.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from lookupgraph.core.association import Association, AssociationKind
from lookupgraph.core.errors import UnknownAttribute

if TYPE_CHECKING:
    from lookupgraph.core.record import Record
    from lookupgraph.registry.lookup_type import LookupType


def _foreign_key_value(owner: LookupType, record: Record, association: Association) -> Any:
    assert association.foreign_key is not None
    if association.foreign_key not in owner.schema.attributes:
        raise UnknownAttribute(owner.name, association.foreign_key)
    return record[association.foreign_key]


def _through(record: Record, association: Association) -> Any:
    assert association.through is not None and association.source is not None
    base = record.related(association.through)
    if base is None:
        return None
    if not isinstance(base, tuple):
        return base.related(association.source)
    results: list[Record] = []
    for intermediate in base:
        value = intermediate.related(association.source)
        if isinstance(value, tuple):
            results.extend(value)
        elif value is not None:
            results.append(value)
    return tuple(results)


def navigate(owner: LookupType, record: Record, association: Association) -> Any:
    """Compute ``association`` for ``record``.

    Args:
        owner: Type of ``record``.
        record: Record to navigate from.
        association: Declaration to follow.

    Returns:
        A Record or None for BELONGS_TO and HAS_ONE (and THROUGH a to-one
        base), otherwise a tuple of records, flattened and without Nones.

    Raises:
        UnknownType, NotAnAssociableType: If the target can't be resolved.
        UnknownAssociation: If a through chain names a missing association.
        UnknownAttribute: If a foreign key attribute is missing.
    """
    if association.kind is AssociationKind.THROUGH:
        return _through(record, association)

    target = owner.association_target(association)
    if association.kind is AssociationKind.BELONGS_TO:
        key = _foreign_key_value(owner, record, association)
        return None if key is None else target.get(key)

    if association.foreign_key not in target.schema.attributes:
        raise UnknownAttribute(target.name, association.foreign_key)
    if record.primary_key is None:
        return () if association.kind is AssociationKind.HAS_MANY else None
    criteria = {association.foreign_key: record.primary_key}
    if association.kind is AssociationKind.HAS_MANY:
        return target.where(criteria)
    return target.find_by(criteria)
