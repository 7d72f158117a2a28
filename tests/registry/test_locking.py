"""Tests for the UNLOCKED -> LOCKED state machine."""

import threading

import pytest

from lookupgraph import EnumNotReady, LoadPolicy, RegistryState


def test_new_type_is_unlocked(foo_type):
    assert foo_type.state is RegistryState.UNLOCKED
    assert "UNLOCKED" in repr(foo_type)


def test_reading_unlocked_type_without_pending_work_raises(foo_type):
    foo_type.register({"id": 1})

    with pytest.raises(EnumNotReady, match="Cannot use unlocked lookup type Foo"):
        foo_type.all()
    with pytest.raises(EnumNotReady):
        foo_type.get(1)
    with pytest.raises(EnumNotReady):
        foo_type.where(name="x")


def test_lock_is_idempotent(foo_type):
    foo_type.register({"id": 1})
    foo_type.lock()
    storage = foo_type.registry._records

    foo_type.lock()

    assert foo_type.state is RegistryState.LOCKED
    assert foo_type.registry._records is storage
    assert repr(foo_type) == "Foo(LOCKED id: int, name: str, enabled: bool)"


def test_locked_storage_is_read_only(locked_foo):
    with pytest.raises(TypeError):
        locked_foo.registry._records[99] = None


def test_lock_cascades_to_descendants(catalog):
    @catalog.declare
    def Animal(t):
        t.attribute("id", int)

    @catalog.declare(parent=Animal)
    def Dog(t):
        pass

    @catalog.declare(parent=Dog)
    def Puppy(t):
        pass

    Animal.lock()

    assert Dog.is_locked
    assert Puppy.is_locked


def test_locking_a_child_leaves_the_parent_unlocked(catalog):
    @catalog.declare
    def Animal(t):
        t.attribute("id", int)

    @catalog.declare(parent=Animal)
    def Dog(t):
        pass

    Dog.lock()

    assert Dog.is_locked
    assert not Animal.is_locked


def test_subtype_declared_after_parent_locked_is_born_locked(catalog):
    @catalog.declare
    def Animal(t):
        t.attribute("id", int)

    Animal.lock()

    @catalog.declare(parent=Animal)
    def Cat(t):
        pass

    assert Cat.is_locked
    assert Cat.all() == ()


def test_concurrent_readers_trigger_a_single_lock(foo_type):
    """Many threads reading a deferred type all see the same committed records."""
    foo_type.register_many([{"id": i} for i in range(100)], policy=LoadPolicy.DEFERRED)
    results = []
    errors = []
    barrier = threading.Barrier(8)

    def read():
        barrier.wait()
        try:
            results.append(foo_type.count())
        except Exception as e:
            errors.append(e)

    threads = [threading.Thread(target=read) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
    assert results == [100] * 8
