"""Rich error construction and validation."""

from build_reporter.error_handling.error_inputs import (
    ErrorInput,
    FromException,
    FromMessage,
    FromMessageAndException,
    FromPartialDetails,
    coerce_error_input,
)
from build_reporter.error_handling.rich_error import (
    RichErrorValidationError,
    build_rich_error,
    parse_stack,
    validate_rich_error,
)

__all__ = [
    "ErrorInput",
    "FromException",
    "FromMessage",
    "FromMessageAndException",
    "FromPartialDetails",
    "RichErrorValidationError",
    "build_rich_error",
    "coerce_error_input",
    "parse_stack",
    "validate_rich_error",
]
