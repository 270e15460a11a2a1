"""
Build Reporter Package.

Structured error reporting and activity tracking for command-line build
tools: validated rich errors, spinners and progress bars linked into an
OpenTelemetry span tree, and optional redirection of stdlib logging.
"""

from .activity import ActivityFactory, ActivityState, ProgressTracker, SpinnerTracker
from .bootstrap import bootstrap_reporter
from .console_redirect import install_global_log_redirection, uninstall_global_log_redirection
from .error_handling import (
    FromException,
    FromMessage,
    FromMessageAndException,
    FromPartialDetails,
    RichErrorValidationError,
    build_rich_error,
)
from .models import ErrorDetails, RichError, StackFrame
from .reporter import Reporter, get_reporter, reset_reporter, set_reporter

__all__ = [
    "ActivityFactory",
    "ActivityState",
    "ErrorDetails",
    "FromException",
    "FromMessage",
    "FromMessageAndException",
    "FromPartialDetails",
    "ProgressTracker",
    "Reporter",
    "RichError",
    "RichErrorValidationError",
    "SpinnerTracker",
    "StackFrame",
    "bootstrap_reporter",
    "build_rich_error",
    "get_reporter",
    "install_global_log_redirection",
    "reset_reporter",
    "set_reporter",
    "uninstall_global_log_redirection",
]
