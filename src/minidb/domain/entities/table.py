"""Table entity - a named, id-keyed collection of records."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Mapping

from minidb.domain.entities.record import Record
from minidb.domain.value_objects import (
    RecordKey,
    TableName,
    parse_record_key,
    validate_table_name,
)


@dataclass
class Table:
    """A named collection of records keyed by record id.

    Inserting a record whose id is already present replaces the previous
    record (last write wins). The table name is not validated on
    construction; the store validates names it creates and from_dict
    validates names it reads.
    """

    name: TableName
    records: dict[RecordKey, Record] = field(default_factory=dict)

    @classmethod
    def new(cls, name: str) -> Table:
        """Create an empty table."""
        return cls(name=TableName(name))

    def put(self, record: Record) -> None:
        """Insert or overwrite a record under its id."""
        self.records[record.id] = record

    def get(self, record_id: int) -> Record | None:
        """Look up a record by id."""
        return self.records.get(RecordKey(record_id))

    def __len__(self) -> int:
        return len(self.records)

    def __contains__(self, record_id: object) -> bool:
        return record_id in self.records

    def __iter__(self) -> Iterator[Record]:
        return iter(self.records.values())

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the on-disk document shape.

        Record keys are stringified since JSON object keys are strings.
        Records are emitted in ascending id order so repeated saves of the
        same table produce identical files.
        """
        return {
            "name": self.name,
            "records": {
                str(key): self.records[key].to_dict() for key in sorted(self.records)
            },
        }

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> Table:
        """Deserialize from the on-disk document shape.

        Map keys are taken from the document's "records" object, not from
        each record's own id, matching how the document was written. Keys
        must be plain decimal strings and the name must be a valid file stem.

        Raises:
            KeyError: If "name" or "records" is missing.
            TypeError: If a part of the document has the wrong type.
            ValueError: If the name, a key or an id is invalid.
        """
        raw_records = raw["records"]
        if not isinstance(raw_records, Mapping):
            raise TypeError(f"records must be a mapping, got {type(raw_records).__name__}")

        records = {
            parse_record_key(key): Record.from_dict(value)
            for key, value in raw_records.items()
        }
        return cls(name=validate_table_name(raw["name"]), records=records)
