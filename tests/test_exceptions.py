"""Tests for the exception types defined in mapupsert.exceptions.

Verifies structured fields, inheritance and message contents.
"""

import pytest

from mapupsert import EphemeralKeyError, InsertHandlerMissingError

from .data_for_upsert_tests import Token


@pytest.mark.parametrize("key", ["a", ("x", 1), 42, Token("t")])
def test_insert_handler_missing_keeps_raw_key(key):
    """InsertHandlerMissingError stores the key object itself."""
    exc = InsertHandlerMissingError(key)

    assert exc.key is key
    assert exc.args == (key,)
    assert isinstance(exc, KeyError)


def test_insert_handler_missing_message():
    """The message names the key and the missing handler."""
    exc = InsertHandlerMissingError("foo")

    assert str(exc) == ("Key 'foo' does not exist in map"
                        ' but no "insert" handler is provided')


def test_insert_handler_missing_caught_as_key_error():
    with pytest.raises(KeyError):
        raise InsertHandlerMissingError("foo")


def test_ephemeral_key_error_fields():
    """EphemeralKeyError stores the key and mentions its type."""
    exc = EphemeralKeyError(5)

    assert exc.key == 5
    assert isinstance(exc, TypeError)
    assert "int" in str(exc)
