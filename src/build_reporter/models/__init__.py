"""Data models for the error reporting pipeline."""

from build_reporter.models.error_models import (
    ErrorDetails,
    ErrorLocation,
    Position,
    RichError,
    StackFrame,
)

__all__ = ["ErrorDetails", "ErrorLocation", "Position", "RichError", "StackFrame"]
