"""Observability setup for dav-objectstore.

Logs are structlog events rendered as JSON lines on stderr, so ``get`` can
stream object bytes to stdout. Verbosity is gated on the ``dav_objectstore``
logger: ``settings.log_level`` sets it at import and each store's ``logLevel``
replaces it on ``init``. Tracing is off unless ``settings.otel_enabled``.
"""

import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog
from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter

from .config import settings

if TYPE_CHECKING:
    from dav_objectstore.schemas import LogLevel

PACKAGE_LOGGER = "dav_objectstore"


def setup_tracing() -> None:
    """Install a tracer provider that prints store operation spans."""
    if not settings.otel_enabled:
        return

    provider = TracerProvider(
        resource=Resource.create({"service.name": settings.otel_service_name})
    )
    # No collector endpoint is configured, spans go to the console
    provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))
    trace.set_tracer_provider(provider)


def setup_logging() -> None:
    """Set up structured logging with structlog."""
    logging.basicConfig(format="%(message)s", stream=sys.stderr)
    logging.getLogger(PACKAGE_LOGGER).setLevel(
        getattr(logging, settings.log_level.upper(), logging.WARNING)
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def apply_log_level(level: "LogLevel") -> None:
    """Gate every dav_objectstore logger at the given verbosity."""
    logging.getLogger(PACKAGE_LOGGER).setLevel(level.logging_level)


def get_logger(name: str) -> Any:
    """Get a logger instance."""
    return structlog.get_logger(name)


def get_tracer(name: str) -> trace.Tracer:
    """Get a tracer instance."""
    return trace.get_tracer(name)


# Initialize on import
setup_logging()
setup_tracing()
