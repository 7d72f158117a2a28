"""Attribute definition models.

Usage:
    AttributeDef("id", int)
    AttributeDef("code", (str, int))
    AttributeDef("created_at", datetime, coercer=datetime.fromisoformat)
    AttributeDef("enabled", BOOLEAN)
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any, TypeAlias

TypeSet: TypeAlias = tuple[type, ...]
"""Non-empty ordered tuple of acceptable runtime types for an attribute."""

Coercer: TypeAlias = Callable[[Any], Any]

BOOLEAN: TypeSet = (bool,)
"""The distinguished boolean type set: missing values become False."""


def normalize_types(types: type | Iterable[type]) -> TypeSet:
    """Normalize a single type or an iterable of types to a TypeSet.

    Raises:
        TypeError: If the result is empty or contains non-types.
    """
    result = (types,) if isinstance(types, type) else tuple(types)
    if not result:
        raise TypeError("An attribute needs at least one type")
    for t in result:
        if not isinstance(t, type):
            raise TypeError(f"{t!r} is not a type")
    return result


@dataclass(frozen=True, slots=True)
class AttributeDef:
    """A named, typed field of a declared type.

    Attributes:
        name: Attribute name, unique within a type's full attribute set.
        types: Acceptable runtime types.
        coercer: Optional function applied to values outside ``types``.
        reader: Optional accessor name on records (defaults to ``name``).
    """

    name: str
    types: TypeSet
    coercer: Coercer | None = field(default=None, compare=False)
    reader: str | None = None

    def __init__(
        self,
        name: str,
        types: type | Iterable[type],
        coercer: Coercer | None = None,
        reader: str | None = None,
    ):
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "types", normalize_types(types))
        object.__setattr__(self, "coercer", coercer)
        object.__setattr__(self, "reader", reader)

    @property
    def is_boolean(self) -> bool:
        return self.types == BOOLEAN

    @property
    def reader_name(self) -> str:
        return self.reader or self.name

    def __repr__(self) -> str:
        return f"{self.name}: {'|'.join(t.__name__ for t in self.types)}"
