"""Insert-or-update of a single key in an externally owned map.

The algorithm lives in ``upsert_item`` and works on any object supporting
``key in container``, ``container[key]`` and ``container[key] = value``.
Two entry points are built on top of it:

- ``upsert_map`` for ordinary (enumerable) mappings such as ``dict``;
- ``upsert_weak_map`` for ephemeral-key mappings such as
  ``weakref.WeakKeyDictionary``, whose keys must be weakly referenceable.

Examples:
    >>> m = {"foo": 9}
    >>> handlers = dict(insert=lambda k, c: 7, update=lambda v, k, c: v * 3)
    >>> upsert_map(m, "foo", handlers)
    27
    >>> upsert_map(m, "bar", handlers)
    7
    >>> m
    {'foo': 27, 'bar': 7}
"""
from __future__ import annotations

import logging
import weakref
from collections.abc import Hashable, Mapping
from typing import Any, Protocol, runtime_checkable

from .action_flags import INSERTED, UNCHANGED, UPDATED, UpsertResult
from .exceptions import EphemeralKeyError, InsertHandlerMissingError
from .handlers import UpsertHandlers

logger = logging.getLogger(__name__)

HandlersArg = UpsertHandlers | Mapping[str, Any] | None
"""What callers may pass as a handler bundle.

None means no handlers; a mapping is read for its "insert" and
"update" entries.
"""


@runtime_checkable
class UpsertableMapping(Protocol):
    """The three container operations an upsert relies on."""

    def __contains__(self, key: Any, /) -> bool: ...

    def __getitem__(self, key: Any, /) -> Any: ...

    def __setitem__(self, key: Any, value: Any, /) -> None: ...


def is_ephemeral_key(key: Any) -> bool:
    """Return True if key can be held by a weakly keyed map."""
    try:
        weakref.ref(key)
    except TypeError:
        return False
    return True


def upsert_item(container: UpsertableMapping,
                key: Hashable,
                handlers: HandlersArg = None) -> UpsertResult:
    """Insert a value for an absent key, or update the value of a present one.

    Args:
        container: The map to read and modify. It is only accessed at key;
            handlers receive it and may touch other keys freely.
        key: The key to upsert.
        handlers: Optional ``insert`` and ``update`` callbacks.

    Returns:
        UpsertResult: Which branch was taken and the value now stored at key.

    Raises:
        InsertHandlerMissingError: If key is absent and no insert handler
            is provided. The container is not modified.
    """
    handlers = UpsertHandlers.from_any(handlers)

    if key in container:
        value = container[key]
        if not handlers.has_update:
            logger.debug("upsert of %r: present, no update handler", key)
            return UpsertResult(UNCHANGED, value)
        value = handlers.update(value, key, container)
        container[key] = value
        logger.debug("upsert of %r: updated", key)
        return UpsertResult(UPDATED, value)

    if not handlers.has_insert:
        raise InsertHandlerMissingError(key)

    inserted = handlers.insert(key, container)
    container[key] = inserted
    logger.debug("upsert of %r: inserted", key)
    return UpsertResult(INSERTED, inserted)


def upsert_map(container: UpsertableMapping,
               key: Hashable,
               handlers: HandlersArg = None) -> Any:
    """Insert a value to a map if key does not exist, otherwise update it.

    Args:
        container: The map to be modified (a dict or any MutableMapping).
        key: The given key.
        handlers: Custom ``update`` and ``insert`` handlers.

    Returns:
        Any: The updated or inserted value. If key is present and there is
            no update handler, the current value, with no write.

    Raises:
        InsertHandlerMissingError: If key does not exist but no insert
            handler is provided.
    """
    return upsert_item(container, key, handlers).new_value


def upsert_weak_map(container: UpsertableMapping,
                    key: Any,
                    handlers: HandlersArg = None) -> Any:
    """Insert a value to a weakly keyed map if key does not exist,
    otherwise update it.

    Behaves exactly like upsert_map, but first checks that key can be
    weakly referenced, so that an unusable key is reported before the
    container or any handler is touched. EphemeralKeyError is a
    precondition failure on the key, not an outcome of the upsert itself;
    once the key passes, InsertHandlerMissingError is the only error the
    upsert raises on its own.

    Args:
        container: The weak map to be modified, e.g. a WeakKeyDictionary.
        key: The given key; must support weak references.
        handlers: Custom ``update`` and ``insert`` handlers.

    Returns:
        Any: The updated or inserted value.

    Raises:
        EphemeralKeyError: If key cannot be weakly referenced.
        InsertHandlerMissingError: If key does not exist but no insert
            handler is provided.
    """
    if not is_ephemeral_key(key):
        raise EphemeralKeyError(key)
    return upsert_item(container, key, handlers).new_value
