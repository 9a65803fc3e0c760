"""Structured logging and OpenTelemetry spans for stylewatch.

This module provides:
- Structured logging setup via structlog
- OpenTelemetry span helper for stylesheet compilation
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

import structlog
from opentelemetry import trace
from opentelemetry.trace import SpanKind, Status, StatusCode

if TYPE_CHECKING:
    from opentelemetry.trace import Span, Tracer

# Tracer name for OpenTelemetry
TRACER_NAME = "stylewatch"

_tracer: Tracer | None = None


def get_tracer() -> Tracer:
    """Get the OpenTelemetry tracer for stylewatch.

    Returns:
        OpenTelemetry Tracer instance. A no-op tracer unless the host
        application installed an SDK TracerProvider.
    """
    global _tracer
    if _tracer is None:
        _tracer = trace.get_tracer(TRACER_NAME)
    return _tracer


def configure_logging(
    *,
    log_level: str = "INFO",
    json_format: bool = False,
    add_timestamp: bool = True,
) -> None:
    """Configure structured logging for stylewatch.

    Args:
        log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_format: If True, output JSON format. If False, output human-readable.
        add_timestamp: If True, add ISO timestamp to log entries.

    Raises:
        ValueError: If log_level is not a known level name.

    Example:
        >>> configure_logging(log_level="DEBUG", json_format=True)
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        msg = f"Unknown log level: {log_level}"
        raise ValueError(msg)

    processors: list[Any] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if add_timestamp:
        processors.insert(1, structlog.processors.TimeStamper(fmt="iso"))

    if json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    logging.basicConfig(format="%(message)s")
    logging.getLogger().setLevel(level)


@contextmanager
def span(
    name: str,
    *,
    kind: SpanKind = SpanKind.INTERNAL,
    attributes: dict[str, Any] | None = None,
) -> Iterator[Span]:
    """Create an OpenTelemetry span that records failures.

    Args:
        name: Span name (e.g., "stylewatch.compile").
        kind: Span kind.
        attributes: Optional span attributes.

    Yields:
        OpenTelemetry Span instance.

    Example:
        >>> with span("stylewatch.compile", attributes={"source": "main.scss"}):
        ...     compile_stylesheet(source, output)
    """
    tracer = get_tracer()

    with tracer.start_as_current_span(name, kind=kind, attributes=attributes or {}) as s:
        try:
            yield s
            s.set_status(Status(StatusCode.OK))
        except Exception as exc:
            s.set_status(Status(StatusCode.ERROR, str(exc)))
            s.record_exception(exc)
            raise
