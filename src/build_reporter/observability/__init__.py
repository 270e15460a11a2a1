"""Observability helpers for the build reporter."""

from build_reporter.observability.tracing import (
    get_tracer,
    init_tracing,
    start_activity_span,
)

__all__ = ["get_tracer", "init_tracing", "start_activity_span"]
