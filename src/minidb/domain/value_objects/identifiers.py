"""Core identifiers and validation helpers for the record store.

Record ids are caller-assigned unsigned 64-bit integers. Table names double
as file stems on disk, so they are restricted to values that map to exactly
one file inside the store directory.
"""

from __future__ import annotations

from typing import NewType


RecordKey = NewType("RecordKey", int)
"""Identifier of a record within its table. Unsigned 64-bit, caller-assigned."""

TableName = NewType("TableName", str)
"""Name of a table. Used as the store's map key and as the on-disk file stem."""

MIN_RECORD_ID = RecordKey(0)
MAX_RECORD_ID = RecordKey(2**64 - 1)

# Characters that would let a table name escape the store directory
_FORBIDDEN_NAME_CHARS = frozenset({"/", "\\", "\x00"})
_RESERVED_NAMES = frozenset({".", ".."})


def validate_record_id(value: object) -> RecordKey:
    """Validate a record id and return it as a RecordKey.

    Args:
        value: Candidate id.

    Returns:
        The id as a RecordKey.

    Raises:
        TypeError: If value is not an int (bool is rejected).
        ValueError: If value is outside the unsigned 64-bit range.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"record id must be an int, got {type(value).__name__}")

    if value < MIN_RECORD_ID or value > MAX_RECORD_ID:
        raise ValueError(f"record id must be in [0, 2**64 - 1], got {value}")

    return RecordKey(value)


def validate_table_name(value: object) -> TableName:
    """Validate a table name and return it as a TableName.

    Raises:
        TypeError: If value is not a str.
        ValueError: If value is empty, reserved, or contains a path separator.
    """
    if not isinstance(value, str):
        raise TypeError(f"table name must be a str, got {type(value).__name__}")

    if not value:
        raise ValueError("table name must not be empty")

    if value in _RESERVED_NAMES:
        raise ValueError(f"table name {value!r} is reserved")

    bad = _FORBIDDEN_NAME_CHARS.intersection(value)
    if bad:
        raise ValueError(f"table name {value!r} contains forbidden characters")

    return TableName(value)


def parse_record_key(value: object) -> RecordKey:
    """Parse a stringified record id, as used for document map keys.

    Only plain ASCII decimal digits are accepted, so "10.0", " 11 " and
    "+5" are rejected rather than collapsing onto another key.

    Raises:
        TypeError: If value is not a str.
        ValueError: If value is not a decimal u64.
    """
    if not isinstance(value, str):
        raise TypeError(f"record key must be a str, got {type(value).__name__}")

    if not (value.isascii() and value.isdigit()):
        raise ValueError(f"record key must be a decimal integer, got {value!r}")

    return validate_record_id(int(value))
