"""JSON file Table Repository implementation.

This adapter implements the TableRepository protocol with one pretty-printed
JSON document per table, stored directly inside a single directory.

File Format (<directory>/<table name>.json):
    {
      "name": "products",
      "records": {
        "10": {
          "id": 10,
          "data": {
            "name": "Laptop",
            "price": "999"
          }
        }
      }
    }

There is no version field, checksum, or magic header. Record map keys are
the stringified record ids. Documents using "fields" instead of "data" for
the record mapping are accepted on read.

Writes overwrite the target file in place unless atomic writes are enabled,
in which case a hidden temp file is written, fsynced and renamed over the
target.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Annotated

from pydantic import (
    AfterValidator,
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    StrictInt,
    StrictStr,
    ValidationError,
    field_validator,
)

from minidb.domain.entities import Record, Table
from minidb.domain.value_objects import (
    MAX_RECORD_ID,
    MIN_RECORD_ID,
    RecordKey,
    TableName,
    parse_record_key,
    validate_table_name,
)
from minidb.infrastructure.config import get_config
from minidb.infrastructure.logging import get_logger
from minidb.ports.outbound.table_repository import PersistenceError


TABLE_FILE_SUFFIX = ".json"
TEMP_FILE_SUFFIX = ".tmp"

logger = get_logger(__name__)

RecordIdField = Annotated[StrictInt, Field(ge=MIN_RECORD_ID, le=MAX_RECORD_ID)]
RecordKeyField = Annotated[StrictStr, AfterValidator(parse_record_key)]


class RecordDocument(BaseModel):
    """Validated shape of a single record inside a table document."""

    model_config = ConfigDict(extra="ignore")

    id: RecordIdField
    data: dict[StrictStr, StrictStr] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("data", "fields"),
    )


class TableDocument(BaseModel):
    """Validated shape of a table file."""

    model_config = ConfigDict(extra="ignore")

    name: StrictStr
    # JSON object keys are strings; only plain decimal keys become ids
    records: dict[RecordKeyField, RecordDocument]

    @field_validator("name")
    @classmethod
    def _name_is_file_stem(cls, value: str) -> str:
        # Loaded names are written back as file stems on the next save
        return validate_table_name(value)

    def to_table(self) -> Table:
        """Convert the validated document into a Table entity."""
        return Table(
            name=TableName(self.name),
            records={
                RecordKey(key): Record(id=RecordKey(doc.id), data=dict(doc.data))
                for key, doc in self.records.items()
            },
        )


class JsonTableRepository:
    """JSON file implementation of the TableRepository protocol.

    Attributes:
        directory: Directory containing the table files.
        indent: Indentation used for pretty-printing.
        atomic_writes: Whether writes go through a temp file and rename.
    """

    def __init__(
        self,
        directory: str | Path,
        indent: int | None = None,
        atomic_writes: bool | None = None,
    ) -> None:
        """Initialize the repository.

        Args:
            directory: Directory for table files. Not created here.
            indent: JSON indentation (default from config).
            atomic_writes: Use temp file + rename (default from config).
        """
        config = get_config()
        self._directory = Path(directory)
        self._indent = config.store.indent if indent is None else indent
        self._atomic_writes = (
            config.store.atomic_writes if atomic_writes is None else atomic_writes
        )

    @property
    def directory(self) -> Path:
        """Return the directory holding the table files."""
        return self._directory

    @property
    def atomic_writes(self) -> bool:
        """Return whether writes are atomic renames."""
        return self._atomic_writes

    def ensure_directory(self) -> None:
        """Create the directory and any missing parents."""
        self._directory.mkdir(parents=True, exist_ok=True)

    def table_path(self, name: str) -> Path:
        """Return <directory>/<name>.json."""
        return self._directory / f"{name}{TABLE_FILE_SUFFIX}"

    def encode(self, table: Table) -> str:
        """Serialize a table to its JSON document text.

        Raises:
            PersistenceError: If a record field is not a string or the
                table holds values JSON cannot encode.
        """
        try:
            return json.dumps(table.to_dict(), indent=self._indent, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise PersistenceError(
                f"Cannot serialize table {table.name!r}: {e}", self.table_path(table.name)
            ) from e

    def decode(self, text: str | bytes, path: Path) -> Table:
        """Deserialize and validate JSON document text into a Table.

        Raises:
            PersistenceError: If the text is not a valid table document.
        """
        try:
            document = TableDocument.model_validate_json(text)
        except ValidationError as e:
            raise PersistenceError(f"Invalid table document {path}: {e}", path) from e
        return document.to_table()

    def write_table(self, table: Table) -> Path:
        """Write a table, fully replacing any existing file.

        The document is encoded before the file is opened so a table that
        cannot be serialized never truncates its existing file.
        """
        path = self.table_path(table.name)
        text = self.encode(table)

        try:
            if self._atomic_writes:
                self._write_atomic(path, text)
            else:
                path.write_text(text, encoding="utf-8")
        except OSError as e:
            raise PersistenceError(f"Cannot write table file {path}: {e}", path) from e

        logger.debug("table_file_written", path=str(path), atomic=self._atomic_writes)
        return path

    def _write_atomic(self, path: Path, text: str) -> None:
        """Write text to a hidden temp file in the same directory, then rename."""
        temp_path = path.with_name(f".{path.name}{TEMP_FILE_SUFFIX}")
        try:
            with open(temp_path, "w", encoding="utf-8") as f:
                f.write(text)
                f.flush()
                os.fsync(f.fileno())
            os.replace(temp_path, path)
        except OSError:
            temp_path.unlink(missing_ok=True)
            raise

    def list_table_files(self) -> list[Path]:
        """Return regular *.json files directly inside the directory, sorted."""
        try:
            entries = list(self._directory.iterdir())
        except OSError as e:
            raise PersistenceError(
                f"Cannot list table directory {self._directory}: {e}", self._directory
            ) from e

        return sorted(
            entry
            for entry in entries
            if entry.suffix == TABLE_FILE_SUFFIX and entry.is_file()
        )

    def read_table(self, path: Path) -> Table:
        """Read and deserialize a single table file."""
        try:
            text = path.read_bytes()
        except OSError as e:
            raise PersistenceError(f"Cannot read table file {path}: {e}", path) from e

        table = self.decode(text, path)
        logger.debug("table_file_read", path=str(path), table=table.name)
        return table
