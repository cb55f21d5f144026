"""Custom exception types raised by mapupsert.

Defines two exception classes:

- ``InsertHandlerMissingError``: key is absent and no insert handler
  was supplied.
- ``EphemeralKeyError``: key cannot be held by an ephemeral-key
  (weakly keyed) mapping.
"""

from __future__ import annotations

from typing import Any


class InsertHandlerMissingError(KeyError):
    """The key is absent from the map and no ``insert`` handler was given.

    Raised before the container is touched, so the map is guaranteed
    unchanged when this error is seen. Subclasses ``KeyError`` so that
    code catching missing keys keeps working.

    Args:
        key: The key that was not found.

    Attributes:
        key: The key that was not found (the raw object, not its repr).
    """

    def __init__(self, key: Any) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return (f"Key {self.key!r} does not exist in map"
                f' but no "insert" handler is provided')


class EphemeralKeyError(TypeError):
    """The key cannot be weakly referenced.

    Ephemeral-key maps hold their keys weakly, which rules out ints,
    strings, tuples, ``None`` and other objects without weakref support.

    Args:
        key: The rejected key.

    Attributes:
        key: The rejected key.
    """

    def __init__(self, key: Any) -> None:
        super().__init__(
            f"{type(key).__name__} object {key!r} cannot be used"
            f" as an ephemeral (weakly referenced) key")
        self.key = key
