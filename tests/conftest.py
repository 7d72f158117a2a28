"""Shared test fixtures."""

import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from lookupgraph import BOOLEAN, Catalog, LoadPolicy, RegistrySettings


@pytest.fixture
def settings():
    """Settings isolated from LOOKUPGRAPH_* environment variables."""
    return RegistrySettings(
        primary_key="id",
        discriminator="type",
        data_root=None,
        deferred_lock_delay=None,
        memoize_money=True,
        default_currency="USD",
    )


@pytest.fixture
def catalog(settings):
    """Fresh Catalog instance."""
    return Catalog(settings=settings)


@pytest.fixture
def foo_type(catalog):
    """Unlocked Foo type with id, name and an enabled flag."""

    @catalog.declare
    def Foo(t):
        t.attribute("id", int)
        t.attribute("name", str)
        t.attribute("enabled", BOOLEAN)

    return Foo


@pytest.fixture
def locked_foo(foo_type):
    """Foo with three records, locked."""
    foo_type.register_many(
        [
            {"id": 1, "name": "first", "enabled": True},
            {"id": 2, "name": "second"},
            {"id": 3, "name": "third", "enabled": False},
        ],
        policy=LoadPolicy.IMMEDIATE,
    )
    return foo_type
