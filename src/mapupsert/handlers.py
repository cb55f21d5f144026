"""Callback protocols and the per-call handler bundle.

An upsert is customised by at most two callbacks:

- ``insert(key, container)`` produces the value for an absent key.
- ``update(current_value, key, container)`` produces the replacement
  for a present key.

Either may be omitted. ``UpsertHandlers`` keeps both slots explicit, so
"not supplied" is always ``None`` and is never confused with a falsy
callable.
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import (Any, Generic, Optional, Protocol,
                    TypeVar, runtime_checkable)

KeyType = TypeVar('KeyType')
ValueType = TypeVar('ValueType')

HANDLER_NAMES = frozenset({"insert", "update"})


@runtime_checkable
class InsertHandler(Protocol[KeyType, ValueType]):
    """Protocol for callbacks producing the value of an absent key."""

    def __call__(self, key: KeyType, container: Any, /) -> ValueType: ...


@runtime_checkable
class UpdateHandler(Protocol[KeyType, ValueType]):
    """Protocol for callbacks replacing the value of a present key."""

    def __call__(self, value: ValueType, key: KeyType, container: Any, /
                 ) -> ValueType: ...


@dataclass(frozen=True)
class UpsertHandlers(Generic[KeyType, ValueType]):
    """Optional insert and update callbacks for a single upsert call.

    Attributes:
        insert: Called as ``insert(key, container)`` when the key is absent.
            If None, upserting an absent key raises
            InsertHandlerMissingError.
        update: Called as ``update(current_value, key, container)`` when the
            key is present. If None, the current value is returned and the
            container is not written.

    Raises:
        TypeError: If a slot holds something other than a callable or None.
    """
    insert: Optional[InsertHandler[KeyType, ValueType]] = None
    update: Optional[UpdateHandler[KeyType, ValueType]] = None

    def __post_init__(self) -> None:
        for name in ("insert", "update"):
            handler = getattr(self, name)
            if handler is not None and not callable(handler):
                raise TypeError(f"{name} handler must be callable or None,"
                                f" got {type(handler).__name__}")

    @property
    def has_insert(self) -> bool:
        """Whether an insert handler was supplied."""
        return self.insert is not None

    @property
    def has_update(self) -> bool:
        """Whether an update handler was supplied."""
        return self.update is not None

    @classmethod
    def from_any(cls, handlers: UpsertHandlers | Mapping[str, Any] | None
                 ) -> UpsertHandlers:
        """Normalise a caller-supplied handler bundle.

        Args:
            handlers: None (no handlers), an UpsertHandlers instance
                (returned unchanged), or a mapping whose keys are a subset
                of ``{"insert", "update"}``.

        Returns:
            UpsertHandlers: The normalised bundle.

        Raises:
            ValueError: If a mapping contains keys other than
                ``"insert"`` and ``"update"``.
            TypeError: If handlers is of any other type, or a handler
                is not callable.
        """
        if handlers is None:
            return cls()
        if isinstance(handlers, UpsertHandlers):
            return handlers
        if isinstance(handlers, Mapping):
            unknown = set(handlers) - HANDLER_NAMES
            if unknown:
                raise ValueError(f"Unknown handler names: {sorted(map(str, unknown))};"
                                 f" only 'insert' and 'update' are allowed")
            return cls(insert=handlers.get("insert"),
                       update=handlers.get("update"))
        raise TypeError("handlers must be an UpsertHandlers instance,"
                        f" a mapping, or None; got {type(handlers).__name__}")
