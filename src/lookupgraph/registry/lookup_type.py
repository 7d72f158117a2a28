"""LookupType: a declared type together with its registry.

Usage:
    catalog = Catalog()

    @catalog.declare
    def Foo(t):
        t.attribute("id", int)
        t.has_many("bars")

    Foo.register_many([{"id": 1}, {"id": 2}], policy=LoadPolicy.IMMEDIATE)
    Foo.find(1)
    Foo.where(id="2")
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Iterator, Mapping
from typing import TYPE_CHECKING, Any

from lookupgraph.core import inflection
from lookupgraph.core.association import Association
from lookupgraph.core.attribute import AttributeDef, build_attributes
from lookupgraph.core.errors import (
    EnumLocked,
    EnumNotReady,
    NotAnAssociableType,
    NotFound,
    UnknownAssociation,
)
from lookupgraph.core.query import (
    cast_primary_key,
    cast_query_attrs,
    matches,
    primary_key_attribute,
)
from lookupgraph.core.record import Record
from lookupgraph.core.schema import Schema
from lookupgraph.registry import navigation, registration
from lookupgraph.registry.storage import (
    LoadPolicy,
    PendingBatch,
    RegistryState,
    TypeRegistry,
)

if TYPE_CHECKING:
    from lookupgraph.config import RegistrySettings
    from lookupgraph.registry.catalog import Catalog

logger = logging.getLogger(__name__)


def _criteria(criteria: Mapping[str, Any] | None, kwargs: dict[str, Any]) -> dict[str, Any]:
    merged = dict(criteria or {})
    merged.update(kwargs)
    return merged


def lock_each(lookup_types: Iterable[LookupType]) -> None:
    """Lock every type, then raise the first failure, if any."""
    failure: Exception | None = None
    for lookup_type in lookup_types:
        try:
            lookup_type.lock()
        except Exception as error:
            logger.debug("Locking %s failed: %s", lookup_type.name, error)
            if failure is None:
                failure = error
    if failure is not None:
        raise failure


class LookupType:
    """A declared type: immutable schema, registry, and place in an STI tree.

    Created by ``Catalog.define``/``Catalog.declare``, never directly. All
    types of one STI tree share the root's re-entrant mutex so locking and
    deferred processing are never interleaved between siblings.

    Args:
        schema: Frozen schema.
        catalog: Owning catalog, used to resolve type names.
        parent: Parent type for STI, or None for a root.
    """

    def __init__(self, schema: Schema, catalog: Catalog, parent: LookupType | None = None):
        self._schema = schema
        self._catalog = catalog
        self._parent = parent
        self._children: list[LookupType] = []
        self._registry = TypeRegistry(schema.name)
        self._mutex: threading.RLock = parent._mutex if parent else threading.RLock()
        self._association_targets: dict[str, LookupType] = {}
        self._lock_timer: threading.Timer | None = None
        if parent is not None:
            with self._mutex:
                parent._children.append(self)
                if parent.is_locked:
                    # Nothing can be registered through a locked parent.
                    self._registry.freeze()

    # Identity and hierarchy

    @property
    def name(self) -> str:
        return self._schema.name

    @property
    def schema(self) -> Schema:
        return self._schema

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    @property
    def settings(self) -> RegistrySettings:
        return self._catalog.settings

    @property
    def registry(self) -> TypeRegistry:
        return self._registry

    @property
    def parent(self) -> LookupType | None:
        return self._parent

    @property
    def children(self) -> tuple[LookupType, ...]:
        return tuple(self._children)

    @property
    def state(self) -> RegistryState:
        return self._registry.state

    @property
    def is_locked(self) -> bool:
        return self._registry.is_locked

    @property
    def primary_key(self) -> str:
        """Name of the primary key attribute."""
        return self._schema.primary_key

    @property
    def base_type(self) -> LookupType:
        """Root of this type's STI tree."""
        lookup_type = self
        while lookup_type._parent is not None:
            lookup_type = lookup_type._parent
        return lookup_type

    @property
    def table_name(self) -> str:
        return inflection.tableize(self.name)

    def ancestors(self) -> tuple[LookupType, ...]:
        """Parent first, root last."""
        result: list[LookupType] = []
        lookup_type = self._parent
        while lookup_type is not None:
            result.append(lookup_type)
            lookup_type = lookup_type._parent
        return tuple(result)

    def descendants(self) -> tuple[LookupType, ...]:
        result: list[LookupType] = []
        for child in self._children:
            result.append(child)
            result.extend(child.descendants())
        return tuple(result)

    def descends_from(self, other: LookupType) -> bool:
        """True if other is this type or one of its ancestors."""
        return other is self or other in self.ancestors()

    def lineage(self, up_to: LookupType) -> tuple[LookupType, ...]:
        """Types from self up to and including ``up_to``.

        Raises:
            ValueError: If ``up_to`` is not self or an ancestor.
        """
        path = [self]
        for ancestor in self.ancestors():
            if path[-1] is up_to:
                break
            path.append(ancestor)
        if path[-1] is not up_to:
            raise ValueError(f"{up_to.name} is not an ancestor of {self.name}")
        return tuple(path)

    # Construction

    def build(self, raw: Mapping[str, Any] | None = None, /, **kwargs: Any) -> Record:
        """Construct a record without registering it.

        Raises:
            UnrecognizedAttributes, AttributeTypeError, CoercionTypeMismatch,
            SchemaError: See ``build_attributes``.
        """
        attributes = build_attributes(self.name, self._schema.attributes, _criteria(raw, kwargs))
        return Record(self, attributes)

    # Registration

    def register(
        self,
        raw_attrs: Mapping[str, Any],
        *,
        target_type: LookupType | None = None,
        allow_type_discriminator: bool = False,
    ) -> Record:
        """Register one record without locking.

        Args:
            raw_attrs: Raw attribute mapping.
            target_type: Type to instantiate; must descend from this type.
            allow_type_discriminator: Resolve the concrete type from the
                discriminator attribute (``type`` by default).

        Returns:
            The committed record.

        Raises:
            EnumLocked: If this type (or a registry on the commit path) is locked.
            UnknownType, InvalidHierarchy, AbstractTypeRegistration: STI dispatch.
            MissingPrimaryKey, DuplicatePrimaryKey: Key checks.
            Plus any construction error.
        """
        with self._mutex:
            if self.is_locked:
                raise EnumLocked(self.name)
            staged = registration.stage(
                self, [raw_attrs], target_type, allow_type_discriminator
            )
            registration.commit(staged)
        return staged[0].record

    def register_many(
        self,
        entries: Iterable[Mapping[str, Any]],
        *,
        policy: LoadPolicy,
        target_type: LookupType | None = None,
        allow_type_discriminator: bool = False,
    ) -> int:
        """Register a batch of raw mappings.

        With ``LoadPolicy.IMMEDIATE`` the batch is validated in full,
        committed, and the type locked. With ``LoadPolicy.DEFERRED`` the batch
        is queued; it is processed by ``lock()`` or the first read, which is
        where its errors surface. A deferred batch using the discriminator
        also schedules a background lock when ``deferred_lock_delay`` is set.

        Returns:
            Number of entries committed or queued.

        Raises:
            EnumLocked: If this type is locked.
            Plus, for IMMEDIATE, every error ``register`` can raise.
        """
        batch = tuple(dict(entry) for entry in entries)
        with self._mutex:
            if self.is_locked:
                raise EnumLocked(self.name)
            if policy is LoadPolicy.DEFERRED:
                self._registry.defer(PendingBatch(batch, target_type, allow_type_discriminator))
                logger.debug("Deferred %d %s entries", len(batch), self.name)
                delay = self.settings.deferred_lock_delay
                if allow_type_discriminator and delay is not None:
                    self._schedule_lock(delay)
                return len(batch)
            staged = registration.stage(self, batch, target_type, allow_type_discriminator)
            registration.commit(staged)
            self.lock()
        return len(staged)

    def lock(self) -> None:
        """Process pending batches, freeze storage, and lock all descendants.

        Idempotent. If a pending batch fails validation nothing is committed,
        the type stays unlocked and the batch stays pending. A descendant
        that fails to lock does not stop its siblings from locking; the
        first failure is raised once every descendant has been tried.
        """
        if self.is_locked:
            return
        with self._mutex:
            if self.is_locked:
                return
            batches = self._registry.pending()
            if batches:
                seen: dict[Any, Record] = {}
                staged: list[registration.StagedRecord] = []
                for batch in batches:
                    staged.extend(
                        registration.stage(
                            self,
                            batch.entries,
                            batch.target_type,
                            batch.allow_type_discriminator,
                            seen,
                        )
                    )
                registration.commit(staged)
            self._registry.freeze()
            logger.debug("Locked %s with %d records", self.name, len(self._registry))
            lock_each(self._children)

    def _schedule_lock(self, delay: float) -> None:
        """Lock after ``delay`` seconds on a daemon thread.

        Gives the rest of a load sequence time to declare STI subtypes named
        by deferred entries. Timing based: ``Catalog.lock_all()`` after all
        declarations is the reliable protocol. At most one background lock is
        ever scheduled per type.
        """
        if self._lock_timer is not None:
            return
        timer = threading.Timer(delay, self._background_lock)
        timer.daemon = True
        timer.name = f"lookupgraph-lock-{self.name}"
        self._lock_timer = timer
        timer.start()

    def _background_lock(self) -> None:
        try:
            self.lock()
        except Exception:
            # No caller to raise to; the batch stays pending and the next read raises.
            logger.exception("Deferred lock of %s failed", self.name)

    def _ensure_ready(self) -> None:
        if self.is_locked:
            return
        with self._mutex:
            # Lock the topmost type holding pending work; locking cascades down.
            for lookup_type in reversed((self, *self.ancestors())):
                if lookup_type.registry.has_pending:
                    lookup_type.lock()
                    break
            if not self.is_locked:
                raise EnumNotReady(self.name)

    # Querying

    def _primary_key_attribute(self) -> AttributeDef:
        return primary_key_attribute(self.name, self._schema.attributes, self._schema.primary_key)

    def all(self) -> tuple[Record, ...]:
        """Every record, in registration order."""
        self._ensure_ready()
        return self._registry.values()

    def count(self) -> int:
        return len(self.all())

    def first(self, n: int | None = None) -> Record | tuple[Record, ...] | None:
        """First record, or a tuple of the first ``n``."""
        records = self.all()
        if n is None:
            return records[0] if records else None
        return records[:n]

    def last(self, n: int | None = None) -> Record | tuple[Record, ...] | None:
        """Last record, or a tuple of the last ``n``."""
        records = self.all()
        if n is None:
            return records[-1] if records else None
        return records[-n:] if n else ()

    def none(self) -> tuple[Record, ...]:
        return ()

    def get(self, key: Any) -> Record | None:
        """Look up by primary key, casting the key to the attribute's type.

        Raises:
            EnumNotReady: If the type is unlocked with nothing pending.
            IncompatibleKeyType: If the key can't be cast.
        """
        self._ensure_ready()
        cast = cast_primary_key(self.name, self._primary_key_attribute(), key)
        if cast is None:
            return None
        return self._registry.get(cast)

    def find(self, key: Any) -> Record:
        """Like ``get`` but raises NotFound when missing."""
        record = self.get(key)
        if record is None:
            raise NotFound(self.name, {self._schema.primary_key: key})
        return record

    def where(
        self, criteria: Mapping[str, Any] | None = None, /, **kwargs: Any
    ) -> tuple[Record, ...]:
        """All records whose attributes equal every (cast) criterion.

        Raises:
            EnumNotReady, UnknownAttribute, UnsupportedQuery, IncompatibleKeyType.
        """
        self._ensure_ready()
        attrs = cast_query_attrs(self.name, self._schema.attributes, _criteria(criteria, kwargs))
        return tuple(record for record in self._registry.values() if matches(record, attrs))

    def find_by(self, criteria: Mapping[str, Any] | None = None, /, **kwargs: Any) -> Record | None:
        """First record matching every criterion, or None.

        A lone primary key criterion is answered by ``get``.
        """
        self._ensure_ready()
        raw = _criteria(criteria, kwargs)
        if raw.keys() == {self._schema.primary_key}:
            return self.get(raw[self._schema.primary_key])
        attrs = cast_query_attrs(self.name, self._schema.attributes, raw)
        for record in self._registry.values():
            if matches(record, attrs):
                return record
        return None

    def find_by_or_raise(
        self, criteria: Mapping[str, Any] | None = None, /, **kwargs: Any
    ) -> Record:
        """Like ``find_by`` but raises NotFound when nothing matches."""
        record = self.find_by(criteria, **kwargs)
        if record is None:
            raise NotFound(self.name, _criteria(criteria, kwargs))
        return record

    def __iter__(self) -> Iterator[Record]:
        return iter(self.all())

    def __len__(self) -> int:
        return self.count()

    # Associations

    def association(self, accessor: str) -> Association:
        """Look up an association declaration by accessor name.

        Raises:
            UnknownAssociation: If no such association is declared.
        """
        association = self._schema.associations.get(accessor)
        if association is None:
            raise UnknownAssociation(self.name, accessor)
        return association

    def association_target(self, association: Association) -> LookupType:
        """Resolve (once) the target type of an association by name.

        Raises:
            UnknownType: If the name does not resolve.
            NotAnAssociableType: If the target is not a type of this catalog.
        """
        target = self._association_targets.get(association.accessor)
        if target is None:
            assert association.type_name is not None
            resolved = self._catalog.resolve(association.type_name)
            if not self._catalog.owns(resolved):
                raise NotAnAssociableType(self.name, association.accessor, resolved)
            target = self._association_targets[association.accessor] = resolved
        return target

    def navigate(self, record: Record, accessor: str) -> Any:
        """Compute an association of ``record`` against the live registries."""
        return navigation.navigate(self, record, self.association(accessor))

    def __repr__(self) -> str:
        state = "LOCKED" if self.is_locked else "UNLOCKED"
        return f"{self.name}({state} {self._schema.describe()})"
