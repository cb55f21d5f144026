"""Singleton action flags and the structured result of an upsert.

Action flags:
    - INSERTED: the key was absent; the insert handler produced the value.
    - UPDATED: the key was present; the update handler replaced the value.
    - UNCHANGED: the key was present and no update handler was given;
      nothing was written.

Result dataclasses:
    - UpsertResult: returned by upsert_item.
"""
from dataclasses import dataclass
from typing import Final, Generic, TypeVar

from mixinforge import SingletonMixin


class UpsertActionFlag(SingletonMixin):
    """Base class for flags describing which branch an upsert took.

    Note:
        Every subclass is a singleton; constructing it repeatedly returns
        the same instance, so flags can be compared with ``is``.
    """
    pass


class InsertedFlag(UpsertActionFlag):
    """The key was absent and a new value was inserted."""
    pass


class UpdatedFlag(UpsertActionFlag):
    """The key was present and its value was replaced."""
    pass


class UnchangedFlag(UpsertActionFlag):
    """The key was present and the map was left untouched."""
    pass


# --- Singleton constant instances ---

INSERTED: Final[InsertedFlag] = InsertedFlag()
"""Flag: a new entry was written for a previously absent key."""

UPDATED: Final[UpdatedFlag] = UpdatedFlag()
"""Flag: an existing entry was overwritten with the update handler's result."""

UNCHANGED: Final[UnchangedFlag] = UnchangedFlag()
"""Flag: an existing entry was read and returned as is, with no write."""

ValueType = TypeVar('ValueType')
"""Generic type variable for values stored in the upserted map."""


@dataclass(frozen=True)
class UpsertResult(Generic[ValueType]):
    """Outcome of a single upsert.

    Attributes:
        action: INSERTED, UPDATED or UNCHANGED.
        new_value: The value associated with the key after the call.
    """
    action: UpsertActionFlag
    new_value: ValueType

    @property
    def value_was_written(self) -> bool:
        """Whether the call wrote to the map."""
        return self.action is not UNCHANGED
