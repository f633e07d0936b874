"""
Scriptura - Observability Package

Structured logging (structlog) and tracing (OpenTelemetry).

Usage:
    from observability import setup_logging, get_logger, create_span

    setup_logging()
    logger = get_logger(__name__)
"""
from observability.logging import (
    LogContext,
    get_logger,
    setup_logging,
)
from observability.tracing import (
    create_span,
    get_tracer,
    setup_tracing,
    shutdown_tracing,
)

__all__ = [
    "LogContext",
    "get_logger",
    "setup_logging",
    "create_span",
    "get_tracer",
    "setup_tracing",
    "shutdown_tracing",
]
