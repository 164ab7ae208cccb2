"""Table Repository port for whole-table persistence.

This outbound port defines the contract for storing tables on disk. Each
table maps to exactly one file inside a single directory; a write replaces
the whole file and a read returns the whole table.

The repository is responsible for:
- Mapping table names to file paths
- Serializing tables to files and back
- Enumerating the table files present in the directory
"""

from __future__ import annotations

from abc import abstractmethod
from pathlib import Path
from typing import Protocol

from minidb.domain.entities import Table


class TableRepository(Protocol):
    """Protocol for per-table file persistence.

    The repository has no knowledge of which tables the store holds in
    memory; it only reads and writes single tables.

    Thread Safety:
        Not thread-safe. Concurrent writers to the same directory
        interleave whole-file overwrites with no ordering guarantee.
    """

    @property
    @abstractmethod
    def directory(self) -> Path:
        """Return the directory holding the table files."""
        ...

    @abstractmethod
    def ensure_directory(self) -> None:
        """Create the directory and any missing parents.

        Raises:
            OSError: If the directory cannot be created.
        """
        ...

    @abstractmethod
    def table_path(self, name: str) -> Path:
        """Return the file path a table with this name is stored at."""
        ...

    @abstractmethod
    def write_table(self, table: Table) -> Path:
        """Write a table, fully replacing any existing file.

        Args:
            table: The table to write.

        Returns:
            The path written.

        Raises:
            PersistenceError: If serialization or the write fails.
        """
        ...

    @abstractmethod
    def list_table_files(self) -> list[Path]:
        """Return the table files directly inside the directory.

        Subdirectories and files of other formats are not included.

        Raises:
            PersistenceError: If the directory cannot be listed.
        """
        ...

    @abstractmethod
    def read_table(self, path: Path) -> Table:
        """Read and deserialize a single table file.

        Raises:
            PersistenceError: If the file cannot be read or is not a
                valid table document.
        """
        ...


class PersistenceError(Exception):
    """A table file could not be written, listed, or read."""

    def __init__(self, message: str, path: Path) -> None:
        super().__init__(message)
        self.path = path
