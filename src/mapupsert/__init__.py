"""Insert-or-update ("upsert") for dicts and weakly keyed dicts.

Given a key, an upsert either produces and stores a new value (key absent)
or transforms and stores an updated value (key present), and returns the
resulting value in both cases.

Functions:
    upsert_map(): Upsert a key of a dict or any other mutable mapping.
    upsert_weak_map(): Upsert a key of a weakref.WeakKeyDictionary or a
        similar mapping whose keys must support weak references.
    upsert_item(): The shared algorithm; returns an UpsertResult that also
        says which branch was taken.
    is_ephemeral_key(): Check whether an object can key a weak mapping.

Classes:
    UpsertHandlers: Optional insert and update callbacks for one call.
    UpsertResult: Action flag and resulting value of upsert_item().
    UpsertMixin: Adds an upsert() method to a mutable mapping class.
    UpsertDict: A dict with an upsert() method.
    UpsertWeakKeyDictionary: A WeakKeyDictionary with an upsert() method.

Exceptions:
    InsertHandlerMissingError: Key is absent and no insert handler given.
    EphemeralKeyError: Key cannot be weakly referenced.

Constants:
    INSERTED, UPDATED, UNCHANGED: Action flags reported in UpsertResult.
"""
from ._version_info import __version__
from .exceptions import InsertHandlerMissingError, EphemeralKeyError
from .action_flags import (UpsertActionFlag, InsertedFlag, UpdatedFlag,
                           UnchangedFlag, UpsertResult,
                           INSERTED, UPDATED, UNCHANGED)
from .handlers import InsertHandler, UpdateHandler, UpsertHandlers
from .upsert import (UpsertableMapping, is_ephemeral_key,
                     upsert_item, upsert_map, upsert_weak_map)
from .upsert_dicts import UpsertMixin, UpsertDict, UpsertWeakKeyDictionary

__all__ = [
    "__version__",
    "InsertHandlerMissingError", "EphemeralKeyError",
    "UpsertActionFlag", "InsertedFlag", "UpdatedFlag", "UnchangedFlag",
    "UpsertResult", "INSERTED", "UPDATED", "UNCHANGED",
    "InsertHandler", "UpdateHandler", "UpsertHandlers",
    "UpsertableMapping", "is_ephemeral_key",
    "upsert_item", "upsert_map", "upsert_weak_map",
    "UpsertMixin", "UpsertDict", "UpsertWeakKeyDictionary",
]
