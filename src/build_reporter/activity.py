"""
Activity tracking: spinners and progress bars with one tracing span each.

Every tracker owns an ``ActivityState`` that moves through
``created -> running -> finished``. Once finished, further calls are ignored.
Rendering failures are logged and never reach the tracked operation.
"""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from types import TracebackType
from typing import Any

from opentelemetry import trace
from opentelemetry.trace import Span, Tracer

from build_reporter.enums import ActivityStatus, ActivityType
from build_reporter.logging_utils import create_reporter_logger
from build_reporter.observability.tracing import get_tracer, start_activity_span
from build_reporter.protocols import ActivityHandleProtocol, RenderingBackendProtocol
from build_reporter.rendering import NullActivityHandle

logger = create_reporter_logger("activity")


@dataclass
class ActivityState:
    """In-memory record of one activity, independent of the rendering backend."""

    id: str
    type: ActivityType
    status: str = ""
    start_time: float | None = None
    current: int = 0
    total: int | None = None
    phase: ActivityStatus = ActivityStatus.CREATED

    @property
    def is_finished(self) -> bool:
        return self.phase is ActivityStatus.FINISHED

    def mark_started(self, restamp: bool) -> bool:
        """
        Stamp the start time and enter the running phase.

        Args:
            restamp: Stamp again when already running

        Returns:
            True if the start time changed
        """
        if self.is_finished:
            return False
        if self.phase is ActivityStatus.RUNNING and not restamp:
            return False
        self.start_time = time.monotonic()
        self.phase = ActivityStatus.RUNNING
        return True

    def set_status(self, status: str) -> bool:
        if self.is_finished:
            return False
        self.status = status
        return True

    def increment(self) -> bool:
        if self.is_finished:
            return False
        self.current += 1
        return True

    def set_total(self, total: int) -> bool:
        if self.is_finished:
            return False
        self.total = total
        return True

    def finish(self) -> bool:
        if self.is_finished:
            return False
        self.phase = ActivityStatus.FINISHED
        return True


class _ActivityTracker(ABC):
    def __init__(self, state: ActivityState, handle: ActivityHandleProtocol, span: Span) -> None:
        self._state = state
        self._handle = handle
        self._span = span

    @property
    def state(self) -> ActivityState:
        """Snapshot of the activity; changes go through the tracker methods."""
        return replace(self._state)

    @property
    def span(self) -> Span:
        return self._span

    @abstractmethod
    def start(self) -> None: ...

    @abstractmethod
    def _close(self) -> None: ...

    def set_status(self, status: str) -> None:
        if not self._state.set_status(status):
            self._ignored("set_status")
            return
        self._push({"status": status})

    def _push(self, fields: dict[str, Any]) -> None:
        try:
            self._handle.update(fields)
        except Exception:
            logger.warning(
                "Rendering backend failed to update activity",
                activity_id=self._state.id,
                exc_info=True,
            )

    def _ignored(self, operation: str) -> None:
        logger.debug(
            "Ignoring call on finished activity", activity_id=self._state.id, operation=operation
        )

    def _finish(self, operation: str) -> None:
        if not self._state.finish():
            self._ignored(operation)
            return
        self._span.end()
        try:
            self._handle.done()
        except Exception:
            logger.warning(
                "Rendering backend failed to finish activity",
                activity_id=self._state.id,
                exc_info=True,
            )

    def __enter__(self) -> _ActivityTracker:
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if exc is not None and not self._state.is_finished:
            self._span.record_exception(exc)
            self._span.set_status(trace.Status(trace.StatusCode.ERROR, str(exc)))
        self._close()


class SpinnerTracker(_ActivityTracker):
    """Tracker returned by ``activity_timer``."""

    def start(self) -> None:
        # Re-stamps on every call, unlike ProgressTracker.start
        if not self._state.mark_started(restamp=True):
            self._ignored("start")
            return
        self._push({"startTime": self._state.start_time})

    def end(self) -> None:
        self._finish("end")

    def _close(self) -> None:
        self.end()


class ProgressTracker(_ActivityTracker):
    """Tracker returned by ``create_progress``."""

    @property
    def current(self) -> int:
        return self._state.current

    @property
    def total(self) -> int | None:
        return self._state.total

    def start(self) -> None:
        if self._state.mark_started(restamp=False):
            self._push({"startTime": self._state.start_time})

    def tick(self) -> None:
        if not self._state.increment():
            self._ignored("tick")
            return
        self._push({"current": self._state.current})

    def set_total(self, total: int) -> None:
        """Replace the expected item count; ``current`` is left untouched."""
        if not self._state.set_total(total):
            self._ignored("set_total")
            return
        self._push({"total": total})

    def done(self) -> None:
        if not self._state.is_finished:
            self._span.set_attribute("activity.current", self._state.current)
            if self._state.total is not None:
                self._span.set_attribute("activity.total", self._state.total)
        self._finish("done")

    def _close(self) -> None:
        self.done()


class ActivityFactory:
    """Creates trackers wired to the rendering backend and a tracing span."""

    def __init__(self, backend: RenderingBackendProtocol, tracer: Tracer | None = None) -> None:
        self._backend = backend
        self._tracer = tracer or get_tracer()

    def activity_timer(self, name: str, parent_span: Span | None = None) -> SpinnerTracker:
        """
        Time an activity with a spinner.

        Args:
            name: Activity name, also its display label and span name
            parent_span: Optional span to nest this activity's span under
        """
        span = self._start_span(name, ActivityType.SPINNER, parent_span)
        state = ActivityState(id=name, type=ActivityType.SPINNER)
        handle = self._create_handle(state, {"status": state.status})
        return SpinnerTracker(state, handle, span)

    def create_progress(
        self,
        name: str,
        total: int | None,
        start: int = 0,
        parent_span: Span | None = None,
    ) -> ProgressTracker:
        """
        Create a progress bar for an activity.

        Args:
            name: Activity name, also its display label and span name
            total: Total items to be processed, if known yet
            start: Initial item count
            parent_span: Optional span to nest this activity's span under
        """
        span = self._start_span(name, ActivityType.PROGRESS, parent_span)
        state = ActivityState(id=name, type=ActivityType.PROGRESS, current=start, total=total)
        handle = self._create_handle(state, {"current": state.current, "total": state.total})
        return ProgressTracker(state, handle, span)

    def _start_span(
        self, name: str, activity_type: ActivityType, parent_span: Span | None
    ) -> Span:
        span = start_activity_span(self._tracer, name, parent_span)
        span.set_attribute("activity.type", activity_type.value)
        return span

    def _create_handle(
        self, state: ActivityState, fields: dict[str, Any]
    ) -> ActivityHandleProtocol:
        try:
            return self._backend.create_activity(state.type.value, state.id, fields)
        except Exception:
            logger.warning(
                "Rendering backend unavailable, tracking activity in memory only",
                activity_id=state.id,
                exc_info=True,
            )
            return NullActivityHandle()
