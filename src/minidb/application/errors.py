"""Errors raised by the Store."""

from __future__ import annotations

from pathlib import Path


class StoreError(Exception):
    """Base class for store failures."""
    pass


class StoreDirectoryError(StoreError):
    """The store directory could not be created."""

    def __init__(self, directory: Path, reason: str) -> None:
        super().__init__(f"Cannot create store directory {directory}: {reason}")
        self.directory = directory


class TableNotFoundError(StoreError, KeyError):
    """A record was inserted into a table that does not exist."""

    def __init__(self, table_name: str) -> None:
        super().__init__(table_name)
        self.table_name = table_name

    def __str__(self) -> str:
        return f"Table not found: {self.table_name!r}"


class TableSaveError(StoreError):
    """A table could not be written during save."""

    def __init__(self, table_name: str, path: Path, reason: str) -> None:
        super().__init__(f"Failed to save table {table_name!r} to {path}: {reason}")
        self.table_name = table_name
        self.path = path


class TableLoadError(StoreError):
    """A table file could not be read during load."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Failed to load table file {path}: {reason}")
        self.path = path
