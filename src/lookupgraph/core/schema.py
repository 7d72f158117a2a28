"""Immutable schemas and the builder that produces them.

A schema is built once per declared type. Subtype builders start from a
snapshot of the parent schema and may only add to it.

Usage:
    builder = SchemaBuilder("Foo")
    builder.attribute("id", int)
    builder.attribute("enabled", BOOLEAN)
    builder.has_many("bars")
    schema = builder.build()
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from lookupgraph.core import association as assoc
from lookupgraph.core.association import Association, AssociationKind
from lookupgraph.core.attribute import AttributeDef
from lookupgraph.core.errors import SchemaError
from lookupgraph.core.record import Record
from lookupgraph.interop.money import MoneyField, money_accessor_name

DEFAULT_PRIMARY_KEY = "id"
DEFAULT_DISCRIMINATOR = "type"

# Record members; an accessor with one of these names would never be reached.
RESERVED_ACCESSORS = frozenset(name for name in dir(Record) if not name.startswith("_"))


@dataclass(frozen=True, slots=True)
class Schema:
    """Frozen description of one declared type.

    Attributes:
        name: Type name, unique within its catalog.
        attributes: Full attribute set in declaration order, inherited first.
        associations: Associations by accessor name, inherited included.
        money_fields: Derived money accessors by accessor name.
        primary_key: Attribute indexing the registry.
        discriminator: Attribute naming the concrete type of STI entries.
        abstract: Whether instances of exactly this type are forbidden.
        parent: Parent type name, if any.
    """

    name: str
    attributes: Mapping[str, AttributeDef]
    associations: Mapping[str, Association]
    money_fields: Mapping[str, MoneyField]
    primary_key: str = DEFAULT_PRIMARY_KEY
    discriminator: str = DEFAULT_DISCRIMINATOR
    abstract: bool = False
    parent: str | None = None

    def accessor_names(self) -> frozenset[str]:
        """Every name a record answers to, besides mapping keys."""
        names = {attr.reader_name for attr in self.attributes.values()}
        names.update(f"is_{attr.name}" for attr in self.attributes.values() if attr.is_boolean)
        names.update(self.associations)
        names.update(self.money_fields)
        return frozenset(names)

    def describe(self) -> str:
        return ", ".join(repr(attr) for attr in self.attributes.values())


class SchemaBuilder:
    """Collects declarations for one type and produces a frozen Schema.

    Args:
        name: Type name.
        parent: Parent schema to snapshot, or None for a root type.
        primary_key: Primary key attribute (inherited from parent when None).
        discriminator: STI discriminator attribute (inherited when None).
        abstract: Forbid registering instances of exactly this type.
    """

    def __init__(
        self,
        name: str,
        parent: Schema | None = None,
        *,
        primary_key: str | None = None,
        discriminator: str | None = None,
        abstract: bool = False,
    ):
        self.name = name
        self._parent = parent
        self._attributes: dict[str, AttributeDef] = dict(parent.attributes) if parent else {}
        self._associations: dict[str, Association] = (
            dict(parent.associations) if parent else {}
        )
        self._money_fields: dict[str, MoneyField] = dict(parent.money_fields) if parent else {}
        self._primary_key = primary_key or (parent.primary_key if parent else DEFAULT_PRIMARY_KEY)
        self._discriminator = discriminator or (
            parent.discriminator if parent else DEFAULT_DISCRIMINATOR
        )
        self._abstract = abstract
        self._accessors: set[str] = set(parent.accessor_names()) if parent else set()

    def _claim(self, accessor: str) -> None:
        if accessor in RESERVED_ACCESSORS:
            raise SchemaError(f"{self.name}: {accessor!r} is reserved by Record")
        if accessor in self._accessors:
            raise SchemaError(f"{self.name} already declares {accessor!r}")
        self._accessors.add(accessor)

    def attribute(
        self,
        name: str,
        types: type | Iterable[type],
        coercer: Callable[[Any], Any] | None = None,
        reader: str | None = None,
    ) -> SchemaBuilder:
        """Declare a typed attribute.

        Args:
            name: Attribute name.
            types: Acceptable type or types; ``bool`` alone gets nil -> False
                normalization and an ``is_<name>()`` predicate.
            coercer: Applied to values outside ``types``.
            reader: Alternative accessor name on records.

        Returns:
            This builder, for chaining.

        Raises:
            SchemaError: If the name is already declared (inherited included).
        """
        if name in self._attributes:
            raise SchemaError(f"{self.name} already declares attribute {name!r}")
        attr = AttributeDef(name, types, coercer=coercer, reader=reader)
        self._claim(attr.reader_name)
        if attr.is_boolean:
            self._claim(f"is_{name}")
        self._attributes[name] = attr
        return self

    def _add_association(self, association: Association) -> SchemaBuilder:
        self._claim(association.accessor)
        self._associations[association.accessor] = association
        return self

    def belongs_to(
        self,
        name: str,
        type_name: str | None = None,
        foreign_key: str | None = None,
    ) -> SchemaBuilder:
        """Declare ``record.<name>()`` returning the parent whose key is in ``foreign_key``."""
        return self._add_association(assoc.belongs_to(self.name, name, type_name, foreign_key))

    def has_many(
        self,
        name: str,
        type_name: str | None = None,
        foreign_key: str | None = None,
        as_: str | None = None,
        through: str | None = None,
        source: str | None = None,
    ) -> SchemaBuilder:
        """Declare ``record.<name>()`` returning all target records pointing at this one."""
        if through:
            return self.through(name, through, source)
        return self._add_association(
            assoc.has(self.name, name, AssociationKind.HAS_MANY, type_name, foreign_key, as_)
        )

    def has_one(
        self,
        name: str,
        type_name: str | None = None,
        foreign_key: str | None = None,
        through: str | None = None,
        source: str | None = None,
    ) -> SchemaBuilder:
        """Declare ``record.<name>()`` returning the first target record pointing at this one."""
        if through:
            return self.through(name, through, source)
        return self._add_association(
            assoc.has(self.name, name, AssociationKind.HAS_ONE, type_name, foreign_key)
        )

    def through(self, name: str, base: str, source: str | None = None) -> SchemaBuilder:
        """Declare ``record.<name>()`` as ``source`` applied to the results of ``base``.

        Raises:
            SchemaError: If ``base`` is not already declared on this type.
        """
        if base not in self._associations:
            raise SchemaError(f"{self.name}.{name} goes through undeclared association {base!r}")
        return self._add_association(assoc.through(self.name, name, base, source))

    def monetize(
        self,
        cents_attribute: str,
        as_: str | None = None,
        currency: str | None = None,
    ) -> SchemaBuilder:
        """Declare a derived Money accessor over an integer cents attribute.

        Raises:
            SchemaError: If the attribute is missing or not integer-only.
        """
        attr = self._attributes.get(cents_attribute)
        if attr is None:
            raise SchemaError(
                f"no attribute called {cents_attribute!r} on {self.name} "
                "(do you need to add '_cents'?)"
            )
        if attr.types != (int,):
            raise SchemaError(
                f"attribute {cents_attribute!r} can't monetize, only int is allowed"
            )
        field = MoneyField(cents_attribute, as_ or money_accessor_name(cents_attribute), currency)
        self._claim(field.accessor)
        self._money_fields[field.accessor] = field
        return self

    def build(self) -> Schema:
        """Freeze the collected declarations."""
        return Schema(
            name=self.name,
            attributes=MappingProxyType(dict(self._attributes)),
            associations=MappingProxyType(dict(self._associations)),
            money_fields=MappingProxyType(dict(self._money_fields)),
            primary_key=self._primary_key,
            discriminator=self._discriminator,
            abstract=self._abstract,
            parent=self._parent.name if self._parent else None,
        )
