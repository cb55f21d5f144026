"""Tests for upsert_weak_map() on ephemeral-key (weakly keyed) mappings."""

import gc
from weakref import WeakKeyDictionary

import pytest

from mapupsert import (EphemeralKeyError, InsertHandlerMissingError,
                       UpsertHandlers, upsert_weak_map)

from .data_for_upsert_tests import (CountingWeakKeyDictionary, Token,
                                         ephemeral_key_maps)


def make_handlers():
    return UpsertHandlers(insert=lambda k, c: 100,
                          update=lambda v, k, c: v + 50)


def test_object_and_function_keys():
    """A present object key is updated, an absent function key inserted."""
    m = WeakKeyDictionary()
    o1 = Token("o1")

    def o2():
        pass

    m[o1] = 21

    assert upsert_weak_map(m, o1, make_handlers()) == 71
    assert upsert_weak_map(m, o2, make_handlers()) == 100
    assert m[o1] == 71
    assert m[o2] == 100


@pytest.mark.parametrize("MapToTest", ephemeral_key_maps)
def test_insert_on_absent_key(MapToTest):
    """insert(key, container) is stored and returned for absent keys."""
    m = MapToTest()
    foo = Token("foo")
    one = Token("one")

    foo_value = upsert_weak_map(m, foo, dict(insert=lambda k, c: "bar"))
    one_value = upsert_weak_map(m, one, dict(insert=lambda k, c: k.name * 2))

    assert (foo_value, one_value) == ("bar", "oneone")
    assert m[foo] == "bar"
    assert m[one] == "oneone"
    assert len(m) == 2


@pytest.mark.parametrize("MapToTest", ephemeral_key_maps)
def test_update_on_present_key(MapToTest):
    """update(value, key, container) replaces and returns the value."""
    m = MapToTest()
    a = Token("a")

    def b():
        pass

    m[a] = 3
    m[b] = 5

    assert upsert_weak_map(m, a, dict(update=lambda v, k, c: v * 3)) == 9
    assert upsert_weak_map(m, b, dict(update=lambda v, k, c: v * 2)) == 10
    assert m[a] == 9
    assert m[b] == 10
    assert len(m) == 2


@pytest.mark.parametrize("MapToTest", ephemeral_key_maps)
def test_missing_insert_handler_leaves_map_unchanged(MapToTest):
    """An absent key without an insert handler raises before any write."""
    m = MapToTest()
    key = Token("absent")

    with pytest.raises(InsertHandlerMissingError) as exc_info:
        upsert_weak_map(m, key, dict(update=lambda v, k, c: v + 10))

    assert exc_info.value.key is key
    assert len(m) == 0


def test_present_key_without_update_is_a_no_op():
    """Without an update handler the current value is returned unwritten."""
    m = CountingWeakKeyDictionary()
    key = Token("k")
    m[key] = "v"
    m.writes.clear()

    for _ in range(3):
        assert upsert_weak_map(m, key) == "v"

    assert m.writes == []
    assert dict(m) == {key: "v"}


@pytest.mark.parametrize("bad_key", [1, "text", ("a", "b"), None, 2.5])
def test_non_weakrefable_key_is_rejected_before_handlers(bad_key):
    """Keys without weakref support fail up front, handlers untouched."""
    m = CountingWeakKeyDictionary()
    calls = []

    def insert(key, container):
        calls.append(key)
        return 0

    with pytest.raises(EphemeralKeyError) as exc_info:
        upsert_weak_map(m, bad_key, dict(insert=insert))

    assert exc_info.value.key == bad_key
    assert isinstance(exc_info.value, TypeError)
    assert calls == []
    assert m.writes == []


def test_entry_disappears_with_its_key():
    """The map does not keep an upserted key alive."""
    m = WeakKeyDictionary()
    key = Token("short-lived")

    upsert_weak_map(m, key, dict(insert=lambda k, c: [1, 2, 3]))
    assert len(m) == 1

    del key
    gc.collect()

    assert len(m) == 0


def test_handlers_receive_the_weak_map():
    """Handlers get the live weak map and may attach data to other keys."""
    m = WeakKeyDictionary()
    owner = Token("owner")
    extra = Token("extra")

    def insert(key, container):
        assert container is m
        container[extra] = "side data"
        return "main"

    assert upsert_weak_map(m, owner, dict(insert=insert)) == "main"
    assert m[extra] == "side data"


@pytest.mark.parametrize("MapToTest", ephemeral_key_maps)
def test_update_handler_exception_propagates_without_write(MapToTest):
    """An exception from update reaches the caller; the old value stays."""
    m = MapToTest()
    key = Token("k")
    m[key] = 1

    with pytest.raises(ZeroDivisionError):
        upsert_weak_map(m, key, dict(update=lambda v, k, c: v / 0))

    assert m[key] == 1


@pytest.mark.parametrize("MapToTest", ephemeral_key_maps)
def test_insert_handler_exception_propagates_without_write(MapToTest):
    """An exception from insert reaches the caller and nothing is stored."""
    m = MapToTest()
    key = Token("k")

    def insert(key, container):
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError, match="boom"):
        upsert_weak_map(m, key, dict(insert=insert))

    assert key not in m
    assert len(m) == 0
