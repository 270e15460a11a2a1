"""
OpenTelemetry tracing for reporter activities.

Every tracked activity owns one span. Spans started with an explicit parent
become its children; otherwise they nest under whatever span is current.
"""

from __future__ import annotations

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import ConsoleSpanExporter, SimpleSpanProcessor
from opentelemetry.trace import Span, Tracer

from build_reporter.logging_utils import create_reporter_logger

logger = create_reporter_logger("tracing")

TRACER_NAME = "build_reporter"


def init_tracing(service_name: str, exporter: str = "none") -> Tracer:
    """
    Install an SDK tracer provider for the process.

    Args:
        service_name: Value for the ``service.name`` resource attribute
        exporter: "console" to print finished spans, "none" to keep them in-process

    Returns:
        The reporter tracer bound to the new provider
    """
    provider = TracerProvider(resource=Resource.create({"service.name": service_name}))
    if exporter == "console":
        provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))
    trace.set_tracer_provider(provider)
    logger.debug("Tracing initialized", service=service_name, exporter=exporter)
    return provider.get_tracer(TRACER_NAME)


def get_tracer() -> Tracer:
    return trace.get_tracer(TRACER_NAME)


def start_activity_span(
    tracer: Tracer, name: str, parent_span: Span | None = None
) -> Span:
    """Start the span for an activity, as a child of ``parent_span`` when given."""
    context = trace.set_span_in_context(parent_span) if parent_span is not None else None
    return tracer.start_span(name, context=context)
