"""
Scriptura - Tracing with OpenTelemetry

Wraps conversion and validation runs in spans so their duration, book
counts and defect counts can be inspected.

Features:
- SDK TracerProvider with console export when tracing is enabled
- No-op provider otherwise (the API default)
- Context manager for spans with automatic error recording

Usage:
    from observability.tracing import setup_tracing, create_span

    setup_tracing(ObservabilityConfig(tracing_enabled=True))

    with create_span("validate_books", attributes={"books.count": 66}) as span:
        ...
        span.set_attribute("validation.errors", 0)
"""
from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

from opentelemetry import trace
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import ConsoleSpanExporter, SimpleSpanProcessor
from opentelemetry.trace import Span, SpanKind, Status, StatusCode

from config import ObservabilityConfig

# Global state
_tracer_provider: Optional[TracerProvider] = None
_initialized: bool = False


def setup_tracing(config: Optional[ObservabilityConfig] = None) -> trace.TracerProvider:
    """
    Configure OpenTelemetry tracing.

    Args:
        config: Observability configuration. Uses defaults if not provided.

    Returns:
        The tracer provider in effect
    """
    global _tracer_provider, _initialized

    if _initialized:
        return _tracer_provider or trace.get_tracer_provider()

    config = config or ObservabilityConfig()
    _initialized = True

    if not config.tracing_enabled:
        return trace.get_tracer_provider()

    resource = Resource.create({SERVICE_NAME: config.service_name})
    _tracer_provider = TracerProvider(resource=resource)
    _tracer_provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))
    trace.set_tracer_provider(_tracer_provider)

    return _tracer_provider


def get_tracer(name: str, version: str = "1.0.0") -> trace.Tracer:
    """
    Get a tracer instance for manual instrumentation.

    Args:
        name: Tracer name, typically __name__ of the module
        version: Tracer version string
    """
    return trace.get_tracer(name, version)


def shutdown_tracing() -> None:
    """Flush pending spans and forget the configured provider."""
    global _tracer_provider, _initialized
    if _tracer_provider is not None:
        _tracer_provider.shutdown()
    _initialized = False
    _tracer_provider = None


@contextmanager
def create_span(
    name: str,
    kind: SpanKind = SpanKind.INTERNAL,
    attributes: Optional[Dict[str, Any]] = None,
    tracer_name: str = "scriptura",
) -> Iterator[Span]:
    """
    Context manager for creating spans with automatic error handling.

    Args:
        name: Span name
        kind: Span kind
        attributes: Initial span attributes
        tracer_name: Name of the tracer to use

    Yields:
        Active Span instance
    """
    tracer = get_tracer(tracer_name)
    with tracer.start_as_current_span(name, kind=kind) as span:
        if attributes:
            for key, value in attributes.items():
                span.set_attribute(key, value)
        try:
            yield span
        except Exception as e:
            span.set_status(Status(StatusCode.ERROR, str(e)))
            span.record_exception(e)
            raise
