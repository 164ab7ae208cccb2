"""Unit tests for domain value objects - identifiers."""

from __future__ import annotations

import pytest

from minidb.domain.value_objects import (
    MAX_RECORD_ID,
    MIN_RECORD_ID,
    RecordKey,
    TableName,
    parse_record_key,
    validate_record_id,
    validate_table_name,
)


class TestRecordKey:
    """Tests for RecordKey and record id validation."""

    def test_creation(self) -> None:
        """RecordKey can be created from an integer."""
        key = RecordKey(42)
        assert key == 42
        assert isinstance(key, int)

    def test_bounds(self) -> None:
        """Record ids span the unsigned 64-bit range."""
        assert MIN_RECORD_ID == 0
        assert MAX_RECORD_ID == 18446744073709551615

    def test_validate_accepts_range_edges(self) -> None:
        """Both ends of the range are valid."""
        assert validate_record_id(0) == 0
        assert validate_record_id(2**64 - 1) == MAX_RECORD_ID

    @pytest.mark.parametrize("value", [-1, 2**64])
    def test_validate_rejects_out_of_range(self, value: int) -> None:
        """Ids outside the u64 range are rejected."""
        with pytest.raises(ValueError, match="record id must be in"):
            validate_record_id(value)

    @pytest.mark.parametrize("value", [True, 1.0, "1", None])
    def test_validate_rejects_non_int(self, value: object) -> None:
        """Non-int ids (including bool) are rejected."""
        with pytest.raises(TypeError, match="record id must be an int"):
            validate_record_id(value)


class TestParseRecordKey:
    """Tests for parsing stringified record ids."""

    @pytest.mark.parametrize(
        ("key", "expected"),
        [("0", 0), ("10", 10), ("007", 7), ("18446744073709551615", 2**64 - 1)],
    )
    def test_parses_decimal_keys(self, key: str, expected: int) -> None:
        """Plain decimal strings become record keys."""
        assert parse_record_key(key) == expected

    @pytest.mark.parametrize("key", ["", "10.0", " 11 ", "+5", "-1", "1e3", "0x10", "\u0661"])
    def test_rejects_non_decimal_keys(self, key: str) -> None:
        """Anything but ASCII digits is rejected."""
        with pytest.raises(ValueError, match="record key must be a decimal integer"):
            parse_record_key(key)

    def test_rejects_out_of_range_key(self) -> None:
        """Keys beyond the u64 range are rejected."""
        with pytest.raises(ValueError, match="record id must be in"):
            parse_record_key(str(2**64))

    def test_rejects_non_str(self) -> None:
        """Only strings are parsed."""
        with pytest.raises(TypeError, match="record key must be a str"):
            parse_record_key(10)


class TestTableName:
    """Tests for TableName validation."""

    def test_creation(self) -> None:
        """TableName is a plain str at runtime."""
        name = TableName("users")
        assert name == "users"
        assert isinstance(name, str)

    @pytest.mark.parametrize("value", ["users", "order-items", "t 1", "donnÃ©es", ".hidden"])
    def test_validate_accepts_file_stems(self, value: str) -> None:
        """Names that map to a single file are accepted."""
        assert validate_table_name(value) == value

    @pytest.mark.parametrize("value", ["", ".", "..", "a/b", "a\\b", "a\x00b"])
    def test_validate_rejects_unsafe_names(self, value: str) -> None:
        """Names that are empty, reserved, or contain separators are rejected."""
        with pytest.raises(ValueError):
            validate_table_name(value)

    def test_validate_rejects_non_str(self) -> None:
        """Non-string names are rejected."""
        with pytest.raises(TypeError, match="table name must be a str"):
            validate_table_name(1)
