"""Tests for the default structlog rendering backend."""

from __future__ import annotations

import pytest
from structlog.testing import capture_logs

from build_reporter.config import ReporterSettings
from build_reporter.enums import ErrorCategory, ErrorLevel
from build_reporter.models.error_models import RichError
from build_reporter.rendering import NullActivityHandle, StructlogRenderingBackend


@pytest.fixture
def backend() -> StructlogRenderingBackend:
    return StructlogRenderingBackend(ReporterSettings())


class TestLogLines:
    def test_verbose_is_suppressed_until_enabled(self, backend: StructlogRenderingBackend) -> None:
        with capture_logs() as cap_logs:
            backend.verbose("hidden")
            backend.set_verbose(True)
            backend.verbose("shown")

        assert [entry["event"] for entry in cap_logs] == ["shown"]

    def test_warn_logs_at_warning_level(self, backend: StructlogRenderingBackend) -> None:
        with capture_logs() as cap_logs:
            backend.warn("careful")

        assert cap_logs[0]["log_level"] == "warning"

    def test_error_uses_rich_error_level(self, backend: StructlogRenderingBackend) -> None:
        rich_error = RichError(
            id="95312",
            level=ErrorLevel.WARNING,
            category=ErrorCategory.HTML_COMPILATION,
            text="window is not available",
        )

        with capture_logs() as cap_logs:
            backend.error(rich_error)

        (entry,) = cap_logs
        assert entry["event"] == "window is not available"
        assert entry["log_level"] == "warning"
        assert entry["error_id"] == "95312"
        assert entry["category"] == "HTML_COMPILATION"


class TestActivityHandles:
    def test_progress_done_reports_counts(self, backend: StructlogRenderingBackend) -> None:
        handle = backend.create_activity("progress", "build pages", {"current": 0, "total": 3})
        handle.update({"current": 3})

        with capture_logs() as cap_logs:
            handle.done()

        (entry,) = cap_logs
        assert entry["event"].startswith("build pages - ")
        assert (entry["current"], entry["total"]) == (3, 3)

    def test_spinner_done_includes_status(self, backend: StructlogRenderingBackend) -> None:
        handle = backend.create_activity("spinner", "compile", {"status": ""})
        handle.update({"status": "42 modules"})

        with capture_logs() as cap_logs:
            handle.done()

        assert cap_logs[0]["event"].endswith(" - 42 modules")

    def test_null_handle_accepts_calls(self) -> None:
        handle = NullActivityHandle()

        handle.update({"current": 1})
        handle.done()
