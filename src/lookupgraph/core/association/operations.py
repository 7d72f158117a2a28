"""Factories applying the naming conventions for association declarations."""

from __future__ import annotations

from lookupgraph.core import inflection
from lookupgraph.core.association.models import Association, AssociationKind


def belongs_to(
    owner: str,
    name: str,
    type_name: str | None = None,
    foreign_key: str | None = None,
) -> Association:
    """Declare a to-one association read through a foreign key on the owner.

    Args:
        owner: Declaring type name.
        name: Association name; the target type defaults to ``classify(name)``.
        type_name: Explicit target type name.
        foreign_key: Foreign key attribute on the owner; defaults to ``<name>_id``.

    Returns:
        Association metadata.
    """
    return Association(
        owner=owner,
        name=name,
        kind=AssociationKind.BELONGS_TO,
        accessor=name,
        type_name=type_name or inflection.classify(name),
        foreign_key=foreign_key or inflection.foreign_key(name),
    )


def has(
    owner: str,
    name: str,
    kind: AssociationKind,
    type_name: str | None = None,
    foreign_key: str | None = None,
    as_: str | None = None,
) -> Association:
    """Declare a has-one or has-many association keyed by a foreign key on the target.

    The foreign key defaults to the owner's name, e.g. ``Bar`` -> ``bar_id``.

    Raises:
        ValueError: If kind is not HAS_ONE or HAS_MANY.
    """
    if kind not in (AssociationKind.HAS_ONE, AssociationKind.HAS_MANY):
        raise ValueError(f"{kind} is not a has-association")
    return Association(
        owner=owner,
        name=name,
        kind=kind,
        accessor=as_ or name,
        type_name=type_name or inflection.classify(name),
        foreign_key=foreign_key or inflection.foreign_key(owner),
    )


def through(owner: str, name: str, base: str, source: str | None = None) -> Association:
    """Declare a composition of ``base`` with ``source`` (defaulting to ``name``)."""
    return Association(
        owner=owner,
        name=name,
        kind=AssociationKind.THROUGH,
        accessor=name,
        through=base,
        source=source or name,
    )
