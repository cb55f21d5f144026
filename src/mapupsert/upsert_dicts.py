"""Dictionaries with a built-in ``upsert()`` method.

UpsertMixin adds ``upsert()`` to any mutable mapping class. Two ready-made
classes are provided:

- UpsertDict: a dict subclass.
- UpsertWeakKeyDictionary: a weakref.WeakKeyDictionary subclass whose
  ``upsert()`` rejects keys that cannot be weakly referenced.

Examples:
    >>> d = UpsertDict(foo=9)
    >>> d.upsert("foo", insert=lambda k, c: 7, update=lambda v, k, c: v * 3)
    27
"""
from __future__ import annotations

import weakref
from typing import Any, Optional

from .handlers import InsertHandler, UpdateHandler, UpsertHandlers
from .upsert import HandlersArg, upsert_map, upsert_weak_map


class UpsertMixin:
    """Mixin adding ``upsert()`` to a mutable mapping.

    Attributes:
        ephemeral_keys (bool): If True, keys must support weak references
            and ``upsert()`` follows the ephemeral-key rules.
    """

    ephemeral_keys: bool = False

    def upsert(self,
               key: Any,
               handlers: HandlersArg = None,
               *,
               insert: Optional[InsertHandler] = None,
               update: Optional[UpdateHandler] = None) -> Any:
        """Insert a value for key if it is absent, otherwise update it.

        Handlers can be given either as a bundle or as keyword arguments,
        not both.

        Args:
            key: The key to upsert.
            handlers: An UpsertHandlers instance or a mapping with
                "insert" and/or "update" entries.
            insert: Called as ``insert(key, self)`` when key is absent.
            update: Called as ``update(value, key, self)`` when key is present.

        Returns:
            Any: The value stored at key after the call.

        Raises:
            ValueError: If handlers is combined with insert or update.
            InsertHandlerMissingError: If key is absent and there is no
                insert handler.
            EphemeralKeyError: If ephemeral_keys is True and key cannot
                be weakly referenced.
        """
        if insert is not None or update is not None:
            if handlers is not None:
                raise ValueError("Pass either handlers or insert/update"
                                 " keyword arguments, not both")
            handlers = UpsertHandlers(insert=insert, update=update)

        if self.ephemeral_keys:
            return upsert_weak_map(self, key, handlers)
        return upsert_map(self, key, handlers)


class UpsertDict(UpsertMixin, dict):
    """A dict with an ``upsert()`` method."""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({dict.__repr__(self)})"


class UpsertWeakKeyDictionary(UpsertMixin, weakref.WeakKeyDictionary):
    """A WeakKeyDictionary with an ``upsert()`` method.

    Entries disappear once no strong reference to their key remains.
    """

    ephemeral_keys = True
