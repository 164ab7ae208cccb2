"""Ports layer - interface definitions following Hexagonal Architecture.

Ports are abstract interfaces (protocols) that define contracts:
- Outbound ports: Dependencies on external systems (e.g., TableRepository)

Adapters implement these ports with concrete functionality.
"""

from minidb.ports.outbound import PersistenceError, TableRepository

__all__ = [
    "TableRepository",
    "PersistenceError",
]
