"""Structured logging and OpenTelemetry spans for floe-catalog.

This module provides:
- Lazily created structlog logger and OpenTelemetry tracer
- Logging configuration (JSON or console rendering)
- Span helpers for partition resolution
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
    from structlog.stdlib import BoundLogger

_logger: BoundLogger | None = None
_tracer: Tracer | None = None

TRACER_NAME = "floe.catalog"


def get_logger() -> BoundLogger:
    """Get the module logger, creating it if necessary.

    Example:
        >>> get_logger().info("partition_keys_resolved", keys=["dt"])
    """
    global _logger
    if _logger is None:
        _logger = structlog.get_logger(TRACER_NAME)
    assert _logger is not None  # Type narrowing for mypy
    return _logger


def get_tracer() -> Tracer:
    """Get the OpenTelemetry tracer for floe-catalog."""
    global _tracer
    if _tracer is None:
        _tracer = trace.get_tracer(TRACER_NAME)
    return _tracer


def configure_logging(
    *,
    log_level: str = "INFO",
    json_format: bool = True,
    add_timestamp: bool = True,
) -> None:
    """Configure structured logging for floe-catalog.

    Args:
        log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_format: If True, output JSON format. If False, output human-readable.
        add_timestamp: If True, add ISO timestamp to log entries.

    Raises:
        ValueError: If log_level is not a known level name.
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        msg = f"Unknown log level: {log_level}"
        raise ValueError(msg)

    processors: list[Any] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if add_timestamp:
        processors.insert(0, structlog.processors.TimeStamper(fmt="iso"))

    if json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", level=level)


@contextmanager
def span(
    name: str,
    *,
    attributes: dict[str, Any] | None = None,
) -> Iterator[Span]:
    """Create an internal OpenTelemetry span that records failures.

    Exceptions raised inside the block mark the span as errored and are
    re-raised unchanged.

    Args:
        name: Span name.
        attributes: Optional span attributes.

    Yields:
        OpenTelemetry Span instance.
    """
    attrs = attributes or {}
    with get_tracer().start_as_current_span(
        name, kind=SpanKind.INTERNAL, attributes=attrs
    ) as s:
        try:
            yield s
            s.set_status(Status(StatusCode.OK))
        except Exception as exc:
            s.set_status(Status(StatusCode.ERROR, str(exc)))
            s.record_exception(exc)
            raise


@contextmanager
def partition_operation(
    operation: str,
    *,
    catalog: str | None = None,
    table: str | None = None,
    partition_keys: list[str] | None = None,
) -> Iterator[Span]:
    """Trace and log one partition resolution call.

    Logs ``<operation>_started`` and ``<operation>_completed`` at debug level,
    or ``<operation>_failed`` at warning level when the block raises. Log
    entries carry the same context as the span attributes.

    Args:
        operation: Operation name (e.g., "get_ordered_partition_values").
        catalog: Catalog name.
        table: Table path (database.table).
        partition_keys: Partition keys involved in the operation.

    Yields:
        OpenTelemetry Span instance.

    Example:
        >>> with partition_operation("get_ordered_partition_values", table="db.events"):
        ...     resolve()
    """
    attrs: dict[str, Any] = {"partition.operation": operation}
    context: dict[str, Any] = {}
    if catalog:
        attrs["catalog.name"] = context["catalog"] = catalog
    if table:
        attrs["catalog.table"] = context["table"] = table
    if partition_keys is not None:
        attrs["partition.keys"] = context["partition_keys"] = list(partition_keys)

    log = get_logger().bind(**context)
    with span(f"partition.{operation}", attributes=attrs) as s:
        log.debug(f"{operation}_started")
        try:
            yield s
        except Exception as exc:
            log.warning(f"{operation}_failed", error=str(exc))
            raise
        log.debug(f"{operation}_completed")
