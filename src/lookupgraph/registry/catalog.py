"""Catalog: explicit handle owning a set of declared lookup types.

Usage:
    catalog = Catalog()

    @catalog.declare
    def Animal(t):
        t.attribute("id", int)
        t.attribute("name", str)

    @catalog.declare(parent=Animal)
    def Dog(t):
        t.attribute("good", BOOLEAN)

    Animal.register_many(rows, policy=LoadPolicy.DEFERRED, allow_type_discriminator=True)
    catalog.lock_all()
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterator
from typing import Any, TypeAlias, overload

from lookupgraph.config import RegistrySettings
from lookupgraph.core.errors import SchemaError, UnknownType
from lookupgraph.core.schema import SchemaBuilder
from lookupgraph.registry.lookup_type import LookupType, lock_each

logger = logging.getLogger(__name__)

Build: TypeAlias = Callable[[SchemaBuilder], Any]
Resolver: TypeAlias = Callable[[str], Any]


class Catalog:
    """Namespace of lookup types; resolves type names for STI and associations.

    Args:
        settings: Registry settings (loaded from the environment when None).
        resolver: Optional name -> object lookup used instead of the catalog's
            own table, for hosts that keep types in their own namespace. A
            resolver returning None means the name is unknown.
    """

    def __init__(
        self,
        settings: RegistrySettings | None = None,
        resolver: Resolver | None = None,
    ):
        self._settings = settings or RegistrySettings()
        self._resolver = resolver
        self._types: dict[str, LookupType] = {}
        self._lock = threading.Lock()

    @property
    def settings(self) -> RegistrySettings:
        return self._settings

    def define(
        self,
        name: str,
        build: Build | None = None,
        *,
        parent: LookupType | None = None,
        abstract: bool = False,
        primary_key: str | None = None,
        discriminator: str | None = None,
    ) -> LookupType:
        """Declare a type.

        Args:
            name: Unique type name.
            build: Called with a SchemaBuilder to declare attributes and associations.
            parent: STI parent; the schema starts from a snapshot of the parent's.
            abstract: Forbid registering instances of exactly this type.
            primary_key: Primary key attribute (inherited, or from settings for roots).
            discriminator: STI discriminator attribute (inherited, or from settings).

        Returns:
            The new LookupType, UNLOCKED unless its parent is already locked.

        Raises:
            SchemaError: If the name is taken, the parent belongs to another
                catalog, or a declaration is invalid.
        """
        if parent is not None and parent.catalog is not self:
            raise SchemaError(f"parent {parent.name} of {name} belongs to another catalog")
        builder = SchemaBuilder(
            name,
            parent.schema if parent else None,
            primary_key=primary_key or (None if parent else self._settings.primary_key),
            discriminator=discriminator or (None if parent else self._settings.discriminator),
            abstract=abstract,
        )
        if build is not None:
            build(builder)
        schema = builder.build()
        with self._lock:
            if name in self._types:
                raise SchemaError(f"{name} is already declared")
            lookup_type = LookupType(schema, self, parent)
            self._types[name] = lookup_type
        logger.debug("Declared %r", lookup_type)
        return lookup_type

    @overload
    def declare(self, build: Build, /) -> LookupType: ...

    @overload
    def declare(
        self,
        name: str | None = None,
        /,
        *,
        parent: LookupType | None = None,
        abstract: bool = False,
        primary_key: str | None = None,
        discriminator: str | None = None,
    ) -> Callable[[Build], LookupType]: ...

    def declare(
        self,
        build: Build | str | None = None,
        /,
        *,
        parent: LookupType | None = None,
        abstract: bool = False,
        primary_key: str | None = None,
        discriminator: str | None = None,
    ) -> LookupType | Callable[[Build], LookupType]:
        """Declare a type from a build function, named after the function.

        Supports three forms:
            @catalog.declare                  # bare decorator
            @catalog.declare(parent=Animal)   # factory with options
            @catalog.declare("Foo")           # explicit type name

        Returns:
            The LookupType, which replaces the decorated function.
        """

        def decorator(fn: Build, name: str | None = None) -> LookupType:
            return self.define(
                name or fn.__name__,
                fn,
                parent=parent,
                abstract=abstract,
                primary_key=primary_key,
                discriminator=discriminator,
            )

        if isinstance(build, str):
            type_name = build
            return lambda fn: decorator(fn, type_name)
        if build is None:
            return decorator
        return decorator(build)

    def resolve(self, name: str) -> Any:
        """Resolve a type name.

        Returns:
            Whatever the name denotes: a LookupType of this catalog unless a
            custom resolver says otherwise.

        Raises:
            UnknownType: If nothing is declared under the name.
        """
        found = self._resolver(name) if self._resolver else self._types.get(name)
        if found is None:
            raise UnknownType(name)
        return found

    def owns(self, candidate: Any) -> bool:
        """Check whether candidate is a LookupType declared in this catalog."""
        return isinstance(candidate, LookupType) and self._types.get(candidate.name) is candidate

    def types(self) -> tuple[LookupType, ...]:
        """Declared types in declaration order."""
        return tuple(self._types.values())

    def roots(self) -> tuple[LookupType, ...]:
        return tuple(t for t in self._types.values() if t.parent is None)

    def lock_all(self) -> None:
        """Lock every type; call after all types are declared and loaded.

        Raises:
            The first error surfaced while processing deferred batches,
            after every other type has been locked.
        """
        lock_each(self.roots())
        logger.info("Locked %d lookup types", len(self._types))

    def __getitem__(self, name: str) -> LookupType:
        lookup_type = self._types.get(name)
        if lookup_type is None:
            raise UnknownType(name)
        return lookup_type

    def __contains__(self, name: object) -> bool:
        return name in self._types

    def __iter__(self) -> Iterator[LookupType]:
        return iter(self.types())

    def __len__(self) -> int:
        return len(self._types)

    def __repr__(self) -> str:
        return f"Catalog({', '.join(self._types)})"
