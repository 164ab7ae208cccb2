"""Outbound ports - interfaces for external dependencies.

Outbound ports define contracts for external systems that the record
store depends on, namely the file system holding table files.
"""

from minidb.ports.outbound.table_repository import PersistenceError, TableRepository

__all__ = [
    "TableRepository",
    "PersistenceError",
]
