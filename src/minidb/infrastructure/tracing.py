"""OpenTelemetry tracing for store operations.

Store.save and Store.load each run inside a span ("minidb.save" and
"minidb.load") carrying the table and failure counts. Until tracing is set
up the spans go to the no-op provider of the OpenTelemetry API.

Typical startup:
    config = get_config()
    setup_logging_from_config(config)
    setup_tracing_from_config(config)
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Generator

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter

from minidb.infrastructure.config import Config


INSTRUMENTATION_NAME = "minidb"

_provider: TracerProvider | None = None
_tracer: trace.Tracer | None = None


def build_tracer_provider(
    service_name: str,
    otlp_endpoint: str | None = None,
    console_export: bool = False,
) -> TracerProvider:
    """
    Build an SDK tracer provider for the store.

    Args:
        service_name: Value of the service.name resource attribute
        otlp_endpoint: OTLP gRPC collector endpoint (e.g., "localhost:4317")
        console_export: Whether to also print finished spans

    Returns:
        A provider with one batch processor per configured exporter
    """
    from minidb import __version__

    resource = Resource.create(
        {
            "service.name": service_name,
            "service.version": __version__,
        }
    )
    provider = TracerProvider(resource=resource)

    if otlp_endpoint:
        exporter = OTLPSpanExporter(endpoint=otlp_endpoint, insecure=True)
        provider.add_span_processor(BatchSpanProcessor(exporter))

    if console_export:
        provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))

    return provider


def setup_tracing(
    service_name: str = "minidb",
    otlp_endpoint: str | None = None,
    console_export: bool = False,
) -> trace.Tracer:
    """
    Set up tracing for the store and return its tracer.

    The provider is also offered to the OpenTelemetry API as the global
    provider. The API only accepts the first one; the store's own spans
    always use the provider built here.
    """
    global _provider, _tracer

    from minidb import __version__

    provider = build_tracer_provider(service_name, otlp_endpoint, console_export)
    trace.set_tracer_provider(provider)

    _provider = provider
    _tracer = provider.get_tracer(INSTRUMENTATION_NAME, __version__)
    return _tracer


def setup_tracing_from_config(config: Config) -> trace.Tracer:
    """Set up tracing from a Config's observability section."""
    observability = config.observability
    return setup_tracing(
        service_name=observability.otel_service_name,
        otlp_endpoint=observability.otel_endpoint,
        console_export=observability.otel_console_export,
    )


def get_tracer_provider() -> TracerProvider | None:
    """Return the provider installed by setup_tracing, if any."""
    return _provider


def shutdown_tracing() -> None:
    """Flush pending spans and drop the store's provider and tracer."""
    global _provider, _tracer

    if _provider is not None:
        _provider.shutdown()
    _provider = None
    _tracer = None


def get_tracer() -> trace.Tracer:
    """Get the store's tracer, falling back to the API's global provider."""
    global _tracer
    if _tracer is None:
        _tracer = trace.get_tracer(INSTRUMENTATION_NAME)
    return _tracer


@contextmanager
def trace_span(
    name: str,
    attributes: dict[str, Any] | None = None,
) -> Generator[trace.Span, None, None]:
    """
    Run a block inside a span.

    Exceptions leaving the block are recorded on the span and mark it as
    failed before they propagate.

    Args:
        name: Name of the span
        attributes: Attributes set when the span starts

    Yields:
        The created span
    """
    with get_tracer().start_as_current_span(name, attributes=attributes) as span:
        yield span
