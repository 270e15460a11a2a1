"""
Pytest configuration and fixtures for build reporter tests.

Collaborators (rendering backend, telemetry sink) are mocked at their
protocol boundary; spans are collected with an in-memory exporter on a
test-local tracer provider so the global provider is never touched.
"""

from __future__ import annotations

from typing import Generator
from unittest.mock import MagicMock

import pytest
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from opentelemetry.trace import Tracer

from build_reporter.config import ReporterSettings
from build_reporter.protocols import RenderingBackendProtocol, TelemetrySinkProtocol
from build_reporter.reporter import Reporter, reset_reporter


@pytest.fixture
def span_exporter() -> Generator[InMemorySpanExporter, None, None]:
    """Provide an exporter collecting every span finished by the test tracer."""
    exporter = InMemorySpanExporter()
    yield exporter
    exporter.clear()


@pytest.fixture
def tracer(span_exporter: InMemorySpanExporter) -> Tracer:
    """Provide a tracer bound to a test-local provider."""
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(span_exporter))
    return provider.get_tracer("build_reporter.tests")


@pytest.fixture
def mock_backend() -> MagicMock:
    """Provide a rendering backend mock; create_activity returns a handle mock."""
    return MagicMock(spec=RenderingBackendProtocol)


@pytest.fixture
def mock_telemetry() -> MagicMock:
    return MagicMock(spec=TelemetrySinkProtocol)


@pytest.fixture
def develop_settings() -> ReporterSettings:
    return ReporterSettings(EXECUTING_COMMAND="develop")


@pytest.fixture
def reporter(
    mock_backend: MagicMock,
    mock_telemetry: MagicMock,
    develop_settings: ReporterSettings,
    tracer: Tracer,
) -> Reporter:
    """Provide a reporter wired to mocks, running outside build mode."""
    return Reporter(
        backend=mock_backend,
        telemetry=mock_telemetry,
        settings=develop_settings,
        tracer=tracer,
    )


@pytest.fixture(autouse=True)
def _reset_process_reporter() -> Generator[None, None, None]:
    """Drop the process-wide reporter between tests."""
    yield
    reset_reporter()
