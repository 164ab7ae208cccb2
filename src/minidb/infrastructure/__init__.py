"""Infrastructure layer - cross-cutting concerns."""

from minidb.infrastructure.config import Config, get_config
from minidb.infrastructure.logging import get_logger, setup_logging, setup_logging_from_config
from minidb.infrastructure.metrics import MetricsRegistry, get_metrics, setup_metrics
from minidb.infrastructure.tracing import (
    get_tracer,
    setup_tracing,
    setup_tracing_from_config,
    shutdown_tracing,
    trace_span,
)

__all__ = [
    "Config",
    "get_config",
    "setup_logging",
    "setup_logging_from_config",
    "get_logger",
    "setup_metrics",
    "get_metrics",
    "MetricsRegistry",
    "setup_tracing",
    "setup_tracing_from_config",
    "shutdown_tracing",
    "get_tracer",
    "trace_span",
]
