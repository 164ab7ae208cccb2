"""
MiniDB - Embedded Record Store

An in-memory collection of named tables holding id-keyed records, with
whole-table persistence to one JSON file per table.
"""

__version__ = "0.1.0"
__author__ = "Systems Engineering Portfolio"

from minidb.application import (
    PersistenceReport,
    Store,
    StoreError,
    TableLoadError,
    TableNotFoundError,
    TableSaveError,
)
from minidb.domain.entities import Record, Table

__all__ = [
    "Store",
    "Record",
    "Table",
    "PersistenceReport",
    "StoreError",
    "TableNotFoundError",
    "TableSaveError",
    "TableLoadError",
]
