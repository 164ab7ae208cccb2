"""Prometheus metrics for the record store.

Metrics are collected into a registry only; no HTTP exporter is started.
Callers that want to expose them mount the registry in their own process.
"""

from __future__ import annotations

from prometheus_client import (
    REGISTRY,
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    Info,
)


class MetricsRegistry:
    """Registry of all record store metrics."""

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        """Initialize metrics registry."""
        self._registry = registry or REGISTRY

        # Mutation metrics
        self.tables_created_total = Counter(
            "minidb_tables_created_total",
            "Total number of tables created or reset",
            registry=self._registry,
        )

        self.records_inserted_total = Counter(
            "minidb_records_inserted_total",
            "Total number of records inserted or overwritten",
            registry=self._registry,
        )

        self.inserts_dropped_total = Counter(
            "minidb_inserts_dropped_total",
            "Total number of inserts dropped because the table did not exist",
            registry=self._registry,
        )

        self.tables_in_memory = Gauge(
            "minidb_tables_in_memory",
            "Number of tables currently held in memory",
            registry=self._registry,
        )

        # Persistence metrics
        self.tables_saved_total = Counter(
            "minidb_tables_saved_total",
            "Total number of table files written",
            ["status"],  # success, error
            registry=self._registry,
        )

        self.tables_loaded_total = Counter(
            "minidb_tables_loaded_total",
            "Total number of table files read",
            ["status"],  # success, error
            registry=self._registry,
        )

        self.save_duration_seconds = Histogram(
            "minidb_save_duration_seconds",
            "Duration of a full store save in seconds",
            buckets=(0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0),
            registry=self._registry,
        )

        self.load_duration_seconds = Histogram(
            "minidb_load_duration_seconds",
            "Duration of a full store load in seconds",
            buckets=(0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0),
            registry=self._registry,
        )

        self.info = Info(
            "minidb",
            "Record store information",
            registry=self._registry,
        )

    @property
    def registry(self) -> CollectorRegistry:
        """Return the underlying collector registry."""
        return self._registry


# Global metrics registry
_metrics: MetricsRegistry | None = None


def setup_metrics(registry: CollectorRegistry | None = None) -> MetricsRegistry:
    """
    Set up the global metrics registry.

    Args:
        registry: Optional custom registry

    Returns:
        The metrics registry
    """
    global _metrics
    _metrics = MetricsRegistry(registry)

    from minidb import __version__
    _metrics.info.info({
        "version": __version__,
    })

    return _metrics


def get_metrics() -> MetricsRegistry:
    """Get the global metrics registry."""
    global _metrics
    if _metrics is None:
        _metrics = MetricsRegistry()
    return _metrics
