"""
Protocol definitions for the collaborators the reporter drives.

The rendering backend draws activities and log lines; the telemetry sink
records fatal error events. Both are fire-and-forget from the reporter's
point of view.
"""

from __future__ import annotations

from typing import Any, Protocol

from build_reporter.models.error_models import RichError

__all__ = [
    "ActivityHandleProtocol",
    "RenderingBackendProtocol",
    "TelemetrySinkProtocol",
]


class ActivityHandleProtocol(Protocol):
    """Backend-side handle for one rendered activity."""

    def update(self, fields: dict[str, Any]) -> None:
        """
        Merge changed fields into the rendered activity.

        Args:
            fields: Partial activity fields (status, startTime, current, total)
        """
        ...

    def done(self) -> None:
        """Render the activity's terminal state."""
        ...


class RenderingBackendProtocol(Protocol):
    """Protocol for the terminal rendering backend."""

    def create_activity(
        self, activity_type: str, activity_id: str, fields: dict[str, Any]
    ) -> ActivityHandleProtocol:
        """
        Create a rendered activity.

        Args:
            activity_type: "spinner" or "progress"
            activity_id: Unique activity name, also used as its label
            fields: Initial activity fields

        Returns:
            Handle used to push later updates
        """
        ...

    def error(self, rich_error: RichError) -> None: ...

    def success(self, message: str) -> None: ...

    def verbose(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...

    def warn(self, message: str) -> None: ...

    def log(self, message: str) -> None: ...

    def set_verbose(self, is_verbose: bool) -> None: ...

    def set_colors(self, enabled: bool) -> None: ...


class TelemetrySinkProtocol(Protocol):
    """Protocol for recording error events."""

    def track_error(self, event_name: str, payload: dict[str, Any]) -> None:
        """
        Record an error event.

        Args:
            event_name: Event kind, e.g. GENERAL_PANIC
            payload: Event data
        """
        ...
