"""
Structured logging utilities for the build reporter, built on structlog.

Key Features:
- Reporter context (service name, executing command) on every log line
- Trace context from the active OpenTelemetry span
- Environment-based output formatting (console or JSON)
- Color output that follows the reporter's no-color toggle
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any

import structlog
from opentelemetry.trace import get_current_span
from structlog.contextvars import merge_contextvars
from structlog.typing import Processor

from build_reporter.config import ReporterSettings

# Root of the package logger namespace; console redirection skips these records
PACKAGE_LOGGER_NAME = "build_reporter"


def add_reporter_context(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """
    Add reporter process context to all logs.

    Fields added:
    - service.name: Logical tool name (from REPORTER_SERVICE_NAME env var)
    - reporter.command: The CLI command being executed, if known
    """
    event_dict["service.name"] = os.getenv("REPORTER_SERVICE_NAME", "build-reporter")
    command = os.getenv("REPORTER_EXECUTING_COMMAND")
    if command:
        event_dict["reporter.command"] = command
    return event_dict


def add_trace_context(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Add trace_id and span_id of the active span, formatted as hex strings."""
    span_context = get_current_span().get_span_context()
    if span_context.is_valid:
        event_dict["trace_id"] = format(span_context.trace_id, "032x")
        event_dict["span_id"] = format(span_context.span_id, "016x")
    return event_dict


def configure_reporter_logging(settings: ReporterSettings | None = None) -> None:
    """
    Configure structlog for the reporter process.

    Args:
        settings: Reporter settings (defaults to values read from the environment)

    Environment Variables:
        REPORTER_LOG_FORMAT: "json" for JSON, "console" for human-readable (default)
        REPORTER_LOG_LEVEL: Logging level (default: INFO)
        REPORTER_NO_COLOR: Disable ANSI colors in console output
    """
    if settings is None:
        settings = ReporterSettings()

    os.environ.setdefault("REPORTER_SERVICE_NAME", settings.SERVICE_NAME)
    if settings.EXECUTING_COMMAND:
        os.environ.setdefault("REPORTER_EXECUTING_COMMAND", settings.EXECUTING_COMMAND)

    shared_processors: list[Processor] = [
        merge_contextvars,
        add_reporter_context,
        add_trace_context,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
    ]

    if settings.LOG_FORMAT.lower() == "json":
        processors: list[Processor] = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.dev.set_exc_info,
            structlog.dev.ConsoleRenderer(colors=not settings.NO_COLOR),
        ]

    # Package loggers write to stderr directly and never reach the root logger,
    # so a root-level console redirect cannot loop back into the reporter.
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    package_logger.handlers.clear()
    package_logger.addHandler(logging.StreamHandler(sys.stderr))
    package_logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper()))
    package_logger.propagate = False

    # Not cached: set_colors reconfigures the renderer at runtime
    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


def create_reporter_logger(name: str | None = None) -> Any:
    """
    Create a reporter logger inside the package logger namespace.

    Args:
        name: Optional sub-logger name (e.g., "activity", "facade")

    Returns:
        A structlog BoundLogger instance
    """
    logger_name = f"{PACKAGE_LOGGER_NAME}.{name}" if name else PACKAGE_LOGGER_NAME
    return structlog.get_logger(logger_name)
