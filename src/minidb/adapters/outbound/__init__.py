"""Outbound adapters - implementations of outbound ports.

These adapters implement external dependencies, namely persisting
tables as files on disk.
"""

from minidb.adapters.outbound.json_table_repository import JsonTableRepository

__all__ = [
    "JsonTableRepository",
]
