"""Application layer for the record store.

The application layer orchestrates domain entities and the persistence
port to fulfill the store's use cases.

Exports:
    Store:
        - Store: Main entry point owning tables and their persistence
        - PersistenceReport: Outcome of a save or load
        - PersistenceFailure: A single file that failed to save or load
    Errors:
        - StoreError: Base class for store failures
        - StoreDirectoryError, TableNotFoundError, TableSaveError, TableLoadError
"""

from minidb.application.errors import (
    StoreDirectoryError,
    StoreError,
    TableLoadError,
    TableNotFoundError,
    TableSaveError,
)
from minidb.application.store import PersistenceFailure, PersistenceReport, Store

__all__ = [
    "Store",
    "PersistenceReport",
    "PersistenceFailure",
    "StoreError",
    "StoreDirectoryError",
    "TableNotFoundError",
    "TableSaveError",
    "TableLoadError",
]
