"""Adapters layer - concrete implementations of ports."""

from minidb.adapters.outbound import JsonTableRepository

__all__ = [
    "JsonTableRepository",
]
