"""Tests for tracing setup and activity span creation."""

from __future__ import annotations

from unittest.mock import patch

from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from opentelemetry.trace import Tracer

from build_reporter.observability.tracing import init_tracing, start_activity_span


class TestInitTracing:
    def test_installs_provider_with_service_name(self) -> None:
        target = "build_reporter.observability.tracing.trace.set_tracer_provider"
        with patch(target) as set_provider:
            init_tracing("site-builder", exporter="console")

        provider = set_provider.call_args[0][0]
        assert isinstance(provider, TracerProvider)
        assert provider.resource.attributes["service.name"] == "site-builder"


class TestStartActivitySpan:
    def test_root_span_without_parent(
        self, tracer: Tracer, span_exporter: InMemorySpanExporter
    ) -> None:
        span = start_activity_span(tracer, "bootstrap")
        span.end()

        (finished,) = span_exporter.get_finished_spans()
        assert finished.name == "bootstrap"
        assert finished.parent is None

    def test_child_span_shares_trace(
        self, tracer: Tracer, span_exporter: InMemorySpanExporter
    ) -> None:
        parent = start_activity_span(tracer, "build")
        child = start_activity_span(tracer, "build pages", parent_span=parent)
        child.end()
        parent.end()

        spans = {span.name: span for span in span_exporter.get_finished_spans()}
        assert spans["build pages"].parent.span_id == spans["build"].context.span_id
        assert spans["build pages"].context.trace_id == spans["build"].context.trace_id
