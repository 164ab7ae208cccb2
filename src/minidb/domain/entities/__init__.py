"""Domain entities for the record store.

Exports:
    Record:
        - Record: Caller-identified entry holding string fields

    Table:
        - Table: Named collection of records keyed by record id
"""

from minidb.domain.entities.record import Record
from minidb.domain.entities.table import Table

__all__ = [
    "Record",
    "Table",
]
