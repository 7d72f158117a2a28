"""Descriptors letting host objects point at lookup records.

Usage:
    class Order:
        status = BelongsTo(catalog)   # reads/writes self.status_id

        def __init__(self, status_id=None):
            self.status_id = status_id

    order = Order(status_id=2)
    order.status                      # OrderStatus record 2
    order.status = OrderStatus.find(3)
    order.status_id                   # 3
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from lookupgraph.core import inflection
from lookupgraph.core.errors import NotAnAssociableType
from lookupgraph.core.record import Record

if TYPE_CHECKING:
    from lookupgraph.registry.catalog import Catalog
    from lookupgraph.registry.lookup_type import LookupType


class BelongsTo:
    """Data descriptor resolving a foreign key attribute to a lookup record.

    Args:
        catalog: Catalog declaring the target type.
        type_name: Target type name (defaults to ``classify(<attribute name>)``).
        foreign_key: Attribute on the host holding the key (defaults to ``<name>_id``).
    """

    def __init__(
        self,
        catalog: Catalog,
        type_name: str | None = None,
        foreign_key: str | None = None,
    ):
        self._catalog = catalog
        self._type_name = type_name
        self._foreign_key = foreign_key
        self._owner = ""
        self._name = ""
        self._target: LookupType | None = None

    def __set_name__(self, owner: type, name: str) -> None:
        self._owner = owner.__name__
        self._name = name
        self._type_name = self._type_name or inflection.classify(name)
        self._foreign_key = self._foreign_key or inflection.foreign_key(name)

    @property
    def foreign_key(self) -> str:
        assert self._foreign_key is not None
        return self._foreign_key

    @property
    def target(self) -> LookupType:
        """Target type, resolved on first use."""
        if self._target is None:
            assert self._type_name is not None
            resolved = self._catalog.resolve(self._type_name)
            if not self._catalog.owns(resolved):
                raise NotAnAssociableType(self._owner, self._name, resolved)
            self._target = resolved
        return self._target

    def __get__(self, obj: Any, objtype: type | None = None) -> Any:
        if obj is None:
            return self
        key = getattr(obj, self.foreign_key, None)
        if key is None:
            return None
        return self.target.get(key)

    def __set__(self, obj: Any, value: Record | None) -> None:
        if value is None:
            setattr(obj, self.foreign_key, None)
            return
        if not isinstance(value, Record) or not value.lookup_type.descends_from(self.target):
            raise TypeError(f"{self._owner}.{self._name} expects a {self.target.name} record")
        setattr(obj, self.foreign_key, value.primary_key)
