"""Immutable records: one instance of a declared type.

Usage:
    foo = Foo.find(1)
    foo["name"]        # mapping access
    foo.name           # attribute access
    foo.is_enabled()   # boolean predicate
    foo.bars()         # association navigation
    foo.to_dict()      # plain dict for serialization
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from functools import partial
from typing import TYPE_CHECKING, Any

from lookupgraph.core.attribute import thaw

if TYPE_CHECKING:
    from lookupgraph.interop.money import Money
    from lookupgraph.registry.lookup_type import LookupType


class Record(Mapping[str, Any]):
    """A frozen mapping covering exactly the full attribute set of its type.

    Records are created by ``LookupType.build`` and never mutated. Besides
    mapping access they expose attribute readers, ``is_<name>()`` predicates
    for boolean attributes, association methods and money accessors.
    """

    __slots__ = ("_lookup_type", "_attributes", "_money_cache")

    def __init__(self, lookup_type: LookupType, attributes: Mapping[str, Any]):
        object.__setattr__(self, "_lookup_type", lookup_type)
        object.__setattr__(self, "_attributes", attributes)
        object.__setattr__(self, "_money_cache", {})

    # Mapping protocol

    def __getitem__(self, key: str) -> Any:
        return self._attributes[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._attributes)

    def __len__(self) -> int:
        return len(self._attributes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Record):
            return NotImplemented
        return (
            self._lookup_type is other._lookup_type
            and dict(self._attributes) == dict(other._attributes)
        )

    def __hash__(self) -> int:
        return hash((self._lookup_type.name, self.primary_key))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{self._lookup_type.name} records are immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{self._lookup_type.name} records are immutable")

    def __repr__(self) -> str:
        fields = ", ".join(f"{k}={v!r}" for k, v in self._attributes.items())
        return f"<{self._lookup_type.name} {fields}>"

    # Dynamic accessors

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        schema = self._lookup_type.schema
        for attr in schema.attributes.values():
            if attr.reader_name == name:
                return self._attributes[attr.name]
        if name in schema.associations:
            return partial(self.related, name)
        if name in schema.money_fields:
            return self._money(name)
        if name.startswith("is_"):
            attr = schema.attributes.get(name[3:])
            if attr is not None and attr.is_boolean:
                return partial(bool, self._attributes[attr.name])
        raise AttributeError(f"{self._lookup_type.name} record has no attribute {name!r}")

    def __dir__(self) -> list[str]:
        return sorted(set(super().__dir__()) | self._lookup_type.schema.accessor_names())

    def related(self, association: str) -> Any:
        """Navigate an association by accessor name.

        Returns:
            A Record or None for to-one associations, a tuple for to-many.
        """
        return self._lookup_type.navigate(self, association)

    def _money(self, accessor: str) -> Money | None:
        from lookupgraph.interop.money import Money

        settings = self._lookup_type.settings
        if settings.memoize_money and accessor in self._money_cache:
            return self._money_cache[accessor]
        field = self._lookup_type.schema.money_fields[accessor]
        cents = self._attributes[field.cents_attribute]
        value = (
            None
            if cents is None
            else Money(cents, field.currency or settings.default_currency)
        )
        if settings.memoize_money:
            self._money_cache[accessor] = value
        return value

    # Host integration

    @property
    def lookup_type(self) -> LookupType:
        return self._lookup_type

    @property
    def primary_key(self) -> Any:
        return self._attributes.get(self._lookup_type.schema.primary_key)

    @property
    def persisted(self) -> bool:
        return True

    @property
    def new_record(self) -> bool:
        return False

    def to_key(self) -> tuple[Any, ...]:
        return (self.primary_key,)

    def to_dict(self) -> dict[str, Any]:
        """Plain, mutable copy of the attributes (containers thawed)."""
        return {k: thaw(v) for k, v in self._attributes.items()}
