"""Record entity.

A record is a caller-identified entry in a table: an unsigned 64-bit id plus
an open set of string fields. There is no schema; any field name is allowed
and every value is a string.

On-disk shape (one entry of a table document's "records" object):
    {"id": 10, "data": {"name": "Laptop", "price": "999"}}
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from minidb.domain.value_objects import RecordKey, validate_record_id


def validate_fields(data: object) -> dict[str, str]:
    """Check a field mapping and return an owned copy of it.

    Raises:
        TypeError: If data is not a mapping of str to str.
    """
    if not isinstance(data, Mapping):
        raise TypeError(f"record data must be a mapping, got {type(data).__name__}")

    for key, value in data.items():
        if not isinstance(key, str):
            raise TypeError(f"field name must be a str, got {type(key).__name__}")
        if not isinstance(value, str):
            raise TypeError(f"field {key!r} must have a str value, got {type(value).__name__}")

    return dict(data)


@dataclass
class Record:
    """A single entry in a table.

    Attributes:
        id: Caller-assigned identifier, unique within the owning table.
        data: Field name to field value mapping.

    Example:
        >>> record = Record.new(1, name="Stan", role="Admin")
        >>> record.id
        1
        >>> record.data["name"]
        'Stan'
    """

    id: RecordKey
    data: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate the id and the field mapping."""
        self.id = validate_record_id(self.id)
        # Own the mapping so later caller mutations cannot leak in
        self.data = validate_fields(self.data)

    @classmethod
    def new(cls, record_id: int, /, **fields: str) -> Record:
        """Create a record from keyword fields.

        Any field name is allowed, including "record_id".
        """
        return cls(id=RecordKey(record_id), data=dict(fields))

    @property
    def fields(self) -> dict[str, str]:
        """Alias for data."""
        return self.data

    def get(self, name: str, default: str | None = None) -> str | None:
        """Return a field value, or default if the field is absent."""
        return self.data.get(name, default)

    def copy(self) -> Record:
        """Return an independent copy of this record."""
        return Record(id=self.id, data=dict(self.data))

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the on-disk dictionary shape.

        data is mutable after construction and is checked again here.

        Raises:
            TypeError: If a field name or value is no longer a string.
        """
        return {"id": validate_record_id(self.id), "data": validate_fields(self.data)}

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> Record:
        """Deserialize from the on-disk dictionary shape.

        "fields" is accepted in place of "data".

        Raises:
            KeyError: If "id" is missing.
            TypeError: If raw is not a mapping, the id is not an int, or
                field names or values are not strings.
            ValueError: If the id is out of range.
        """
        if not isinstance(raw, Mapping):
            raise TypeError(f"record must be a mapping, got {type(raw).__name__}")
        data = raw.get("data", raw.get("fields", {}))
        return cls(id=raw["id"], data=data)
