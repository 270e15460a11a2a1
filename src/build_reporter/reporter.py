"""
Reporter facade: the single entry point for logging, error reporting,
fatal exits and activity tracking.

Error calls are enriched into validated ``RichError`` records before they
reach the rendering backend. An error report that fails validation is a
defect at the call site and terminates the process.
"""

from __future__ import annotations

import sys
import time
import traceback
from collections.abc import Mapping
from textwrap import dedent
from typing import Any, NoReturn

from opentelemetry.trace import Span, Tracer

from build_reporter.activity import ActivityFactory, ProgressTracker, SpinnerTracker
from build_reporter.config import ReporterSettings
from build_reporter.enums import TelemetryEvent
from build_reporter.error_handling.error_inputs import coerce_error_input
from build_reporter.error_handling.rich_error import RichErrorValidationError, build_rich_error
from build_reporter.error_map import ERROR_MAP, ErrorDefinition
from build_reporter.logging_utils import create_reporter_logger
from build_reporter.models.error_models import RichError
from build_reporter.protocols import RenderingBackendProtocol, TelemetrySinkProtocol
from build_reporter.rendering import StructlogRenderingBackend
from build_reporter.telemetry import MetricsTelemetrySink

logger = create_reporter_logger("facade")

_PROCESS_START = time.monotonic()


class Reporter:
    def __init__(
        self,
        backend: RenderingBackendProtocol | None = None,
        telemetry: TelemetrySinkProtocol | None = None,
        settings: ReporterSettings | None = None,
        tracer: Tracer | None = None,
        error_map: Mapping[str, ErrorDefinition] | None = None,
    ) -> None:
        self._settings = settings or ReporterSettings()
        self._backend = backend or StructlogRenderingBackend(self._settings)
        self._telemetry = telemetry or MetricsTelemetrySink()
        self._error_map = ERROR_MAP if error_map is None else error_map
        self._activities = ActivityFactory(self._backend, tracer)

    @property
    def settings(self) -> ReporterSettings:
        return self._settings

    @staticmethod
    def strip_indent(text: str) -> str:
        """Strip common leading indentation and surrounding blank lines."""
        return dedent(text).strip("\n")

    def set_verbose(self, is_verbose: bool = True) -> None:
        self._call_backend("set_verbose", is_verbose)

    def set_no_color(self, is_no_color: bool = False) -> None:
        self._call_backend("set_colors", not is_no_color)

    def set_stage(self, stage: str) -> None:
        if hasattr(self._backend, "set_stage"):
            self._call_backend("set_stage", stage)

    def error(self, meta: Any, error: BaseException | None = None) -> RichError:
        """
        Report an error.

        Accepts an ErrorInput variant, or one of the legacy shapes: a message
        and an exception, a bare exception, a mapping of partial details, or a
        bare message.

        Returns:
            The validated RichError handed to the rendering backend
        """
        try:
            source = coerce_error_input(meta, error)
        except TypeError as e:
            print(f"Failed to validate error {e}", file=sys.stderr)
            sys.exit(1)
        try:
            rich_error = build_rich_error(source.to_details(), self._error_map)
        except RichErrorValidationError as e:
            print(f"Failed to validate error {e.validation_error}", file=sys.stderr)
            sys.exit(1)

        self._call_backend("error", rich_error)

        # Formatted traceback duplicated as a log line until the backend renders stacks
        if rich_error.error is not None:
            self.log("".join(traceback.format_exception(rich_error.error)).rstrip("\n"))

        return rich_error

    def panic(self, meta: Any, error: BaseException | None = None) -> NoReturn:
        """Report the error, record a GENERAL_PANIC event and exit with status 1."""
        try:
            self.error(meta, error)
        finally:
            self._track_error(TelemetryEvent.GENERAL_PANIC, _panic_payload(meta, error))
            sys.exit(1)

    def panic_on_build(self, meta: Any, error: BaseException | None = None) -> RichError:
        """
        Report the error and record a BUILD_PANIC event.

        Exits with status 1 only when the executing command is ``build``.
        """
        try:
            rich_error = self.error(meta, error)
        finally:
            self._track_error(TelemetryEvent.BUILD_PANIC, _panic_payload(meta, error))
        if self._settings.is_build_mode:
            sys.exit(1)
        return rich_error

    def uptime(self, prefix: str) -> None:
        self.verbose(f"{prefix}: {(time.monotonic() - _PROCESS_START) * 1000:.3f}ms")

    def success(self, message: str) -> None:
        self._call_backend("success", message)

    def verbose(self, message: str) -> None:
        self._call_backend("verbose", message)

    def info(self, message: str) -> None:
        self._call_backend("info", message)

    def warn(self, message: str) -> None:
        self._call_backend("warn", message)

    def log(self, message: str) -> None:
        self._call_backend("log", message)

    def activity_timer(self, name: str, parent_span: Span | None = None) -> SpinnerTracker:
        return self._activities.activity_timer(name, parent_span=parent_span)

    def create_progress(
        self,
        name: str,
        total: int | None,
        start: int = 0,
        parent_span: Span | None = None,
    ) -> ProgressTracker:
        return self._activities.create_progress(name, total, start=start, parent_span=parent_span)

    def _call_backend(self, method: str, *args: Any) -> None:
        try:
            getattr(self._backend, method)(*args)
        except Exception:
            logger.warning("Rendering backend call failed", method=method, exc_info=True)

    def _track_error(self, event: TelemetryEvent, payload: dict[str, Any]) -> None:
        try:
            self._telemetry.track_error(event.value, payload)
        except Exception:
            logger.warning("Telemetry sink failed", telemetry_event=event.value, exc_info=True)


def _panic_payload(meta: Any, error: BaseException | None) -> dict[str, Any]:
    return {"error": [meta] if error is None else [meta, error]}


_reporter: Reporter | None = None


def get_reporter() -> Reporter:
    """Return the process-wide reporter, creating it on first use."""
    global _reporter

    if _reporter is None:
        _reporter = Reporter()

    return _reporter


def set_reporter(reporter: Reporter) -> None:
    global _reporter
    _reporter = reporter


def reset_reporter() -> None:
    global _reporter
    _reporter = None
