"""
build_reporter.enums - Enums shared by the error pipeline and activity tracking.
"""

from __future__ import annotations

from enum import Enum


class ErrorLevel(str, Enum):
    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"
    DEBUG = "DEBUG"


class ErrorCategory(str, Enum):
    """Subsystem an error definition belongs to."""

    GRAPHQL = "GRAPHQL"
    CONFIG = "CONFIG"
    WEBPACK = "WEBPACK"
    PLUGIN = "PLUGIN"
    HTML_COMPILATION = "HTML_COMPILATION"


class ActivityType(str, Enum):
    SPINNER = "spinner"
    PROGRESS = "progress"


class ActivityStatus(str, Enum):
    """Lifecycle phase of a tracked activity."""

    CREATED = "created"
    RUNNING = "running"
    FINISHED = "finished"


class TelemetryEvent(str, Enum):
    GENERAL_PANIC = "GENERAL_PANIC"
    BUILD_PANIC = "BUILD_PANIC"
