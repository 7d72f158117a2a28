"""Association declaration models.

Declarations only identify their target by type name and foreign key name;
targets are resolved against the catalog at first navigation so types can be
declared in any order.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class AssociationKind(Enum):
    """How an association computes its result."""

    BELONGS_TO = auto()  # foreign key on self -> one parent
    HAS_ONE = auto()  # foreign key on target -> first match
    HAS_MANY = auto()  # foreign key on target -> all matches
    THROUGH = auto()  # base association composed with a source association


@dataclass(frozen=True, slots=True)
class Association:
    """Metadata describing how to navigate from a record to related records.

    Attributes:
        owner: Name of the declaring type.
        name: Association name, used to infer the target type.
        kind: Navigation strategy.
        accessor: Method name on records (``as_`` option, defaults to name).
        type_name: Target type name (unused for THROUGH).
        foreign_key: Foreign key attribute (unused for THROUGH).
        through: Base association accessor (THROUGH only).
        source: Association invoked on each intermediate (THROUGH only).
    """

    owner: str
    name: str
    kind: AssociationKind
    accessor: str
    type_name: str | None = None
    foreign_key: str | None = None
    through: str | None = None
    source: str | None = None

    @property
    def is_through(self) -> bool:
        return self.kind is AssociationKind.THROUGH

    def __repr__(self) -> str:
        if self.is_through:
            return f"{self.owner}.{self.accessor} through {self.through}.{self.source}"
        return (
            f"{self.owner}.{self.accessor} {self.kind.name.lower()} "
            f"{self.type_name} by {self.foreign_key}"
        )
