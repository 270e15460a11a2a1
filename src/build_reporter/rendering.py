"""
Default rendering backend: writes activities and log lines through structlog.

Interactive terminal drawing lives outside this package; this backend keeps
the reporter usable in plain and CI terminals.
"""

from __future__ import annotations

import time
from typing import Any

from structlog.contextvars import bind_contextvars

from build_reporter.config import ReporterSettings
from build_reporter.enums import ActivityType, ErrorLevel
from build_reporter.logging_utils import configure_reporter_logging, create_reporter_logger
from build_reporter.models.error_models import RichError

_LEVEL_METHODS = {
    ErrorLevel.ERROR: "error",
    ErrorLevel.WARNING: "warning",
    ErrorLevel.INFO: "info",
    ErrorLevel.DEBUG: "debug",
}


class NullActivityHandle:
    """Handle used when the backend cannot render an activity."""

    def update(self, fields: dict[str, Any]) -> None:
        pass

    def done(self) -> None:
        pass


class LoggingActivityHandle:
    def __init__(self, logger: Any, activity_type: str, activity_id: str, fields: dict[str, Any]):
        self._logger = logger
        self.activity_type = activity_type
        self.activity_id = activity_id
        self.fields = dict(fields)

    def update(self, fields: dict[str, Any]) -> None:
        self.fields.update(fields)
        if "startTime" in fields:
            self._logger.info(f"{self.activity_id} started", activity_type=self.activity_type)
        else:
            self._logger.debug(self.activity_id, activity_type=self.activity_type, **fields)

    def done(self) -> None:
        start_time = self.fields.get("startTime")
        elapsed = time.monotonic() - start_time if start_time is not None else 0.0
        extra: dict[str, Any] = {}
        if self.activity_type == ActivityType.PROGRESS.value:
            extra = {"current": self.fields.get("current"), "total": self.fields.get("total")}
        status = self.fields.get("status")
        suffix = f" - {status}" if status else ""
        self._logger.info(
            f"{self.activity_id} - {elapsed:.3f}s{suffix}",
            activity_type=self.activity_type,
            **extra,
        )


class StructlogRenderingBackend:
    """Renders reporter output as structured log lines."""

    def __init__(self, settings: ReporterSettings | None = None) -> None:
        self._settings = settings or ReporterSettings()
        self._logger = create_reporter_logger("output")
        self.is_verbose = self._settings.VERBOSE
        self.colors_enabled = not self._settings.NO_COLOR

    def create_activity(
        self, activity_type: str, activity_id: str, fields: dict[str, Any]
    ) -> LoggingActivityHandle:
        return LoggingActivityHandle(self._logger, activity_type, activity_id, fields)

    def error(self, rich_error: RichError) -> None:
        method = getattr(self._logger, _LEVEL_METHODS[rich_error.level])
        method(
            rich_error.text,
            error_id=rich_error.id,
            category=rich_error.category.value if rich_error.category else None,
            file_path=rich_error.file_path,
            docs_url=rich_error.docs_url,
        )

    def success(self, message: str) -> None:
        self._logger.info(message, outcome="success")

    def verbose(self, message: str) -> None:
        if self.is_verbose:
            self._logger.info(message, verbose=True)

    def info(self, message: str) -> None:
        self._logger.info(message)

    def warn(self, message: str) -> None:
        self._logger.warning(message)

    def log(self, message: str) -> None:
        self._logger.info(message)

    def set_verbose(self, is_verbose: bool) -> None:
        self.is_verbose = is_verbose

    def set_colors(self, enabled: bool) -> None:
        self.colors_enabled = enabled
        self._settings = self._settings.model_copy(update={"NO_COLOR": not enabled})
        configure_reporter_logging(self._settings)

    def set_stage(self, stage: str) -> None:
        bind_contextvars(stage=stage)
