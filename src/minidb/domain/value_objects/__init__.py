"""Value objects for the record store domain.

Exports:
    Identifiers:
        - RecordKey: Type-safe unsigned 64-bit record identifier
        - TableName: Type-safe table name
        - MIN_RECORD_ID, MAX_RECORD_ID: Bounds of the record id range
        - validate_record_id, validate_table_name: Validation helpers
        - parse_record_key: Strict parsing of stringified record ids
"""

from minidb.domain.value_objects.identifiers import (
    MAX_RECORD_ID,
    MIN_RECORD_ID,
    RecordKey,
    TableName,
    parse_record_key,
    validate_record_id,
    validate_table_name,
)

__all__ = [
    "RecordKey",
    "TableName",
    "MIN_RECORD_ID",
    "MAX_RECORD_ID",
    "parse_record_key",
    "validate_record_id",
    "validate_table_name",
]
