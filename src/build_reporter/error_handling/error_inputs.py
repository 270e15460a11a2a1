"""
Explicit call shapes accepted by ``Reporter.error``.

Call sites construct one of the variants directly; ``coerce_error_input``
maps the older positional shapes onto them.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Union

from build_reporter.models.error_models import ErrorDetails


def _exception_text(exception: BaseException) -> str:
    return str(exception) or type(exception).__name__


@dataclass(frozen=True)
class FromMessageAndException:
    message: str
    exception: BaseException

    def to_details(self) -> ErrorDetails:
        return ErrorDetails(text=self.message, error=self.exception)


@dataclass(frozen=True)
class FromException:
    exception: BaseException

    def to_details(self) -> ErrorDetails:
        return ErrorDetails(text=_exception_text(self.exception), error=self.exception)


@dataclass(frozen=True)
class FromPartialDetails:
    details: Mapping[str, Any] = field(default_factory=dict)

    def to_details(self) -> ErrorDetails:
        return ErrorDetails.from_mapping(self.details)


@dataclass(frozen=True)
class FromMessage:
    message: str

    def to_details(self) -> ErrorDetails:
        return ErrorDetails(text=self.message)


ErrorInput = Union[FromMessageAndException, FromException, FromPartialDetails, FromMessage]

_VARIANTS = (FromMessageAndException, FromException, FromPartialDetails, FromMessage)


def coerce_error_input(meta: Any, error: BaseException | None = None) -> ErrorInput:
    """
    Normalize a legacy ``error(meta, error)`` call into an ErrorInput.

    Supported shapes: message and exception, a bare exception, a mapping of
    partial details, a bare message. Variants pass through unchanged.

    Raises:
        TypeError: The arguments match none of the supported shapes
    """
    if isinstance(meta, _VARIANTS):
        if error is not None:
            raise TypeError("An ErrorInput variant cannot be combined with an exception")
        return meta
    if error is not None:
        if not isinstance(error, BaseException):
            raise TypeError(f"Expected an exception, got {type(error).__name__}")
        return FromMessageAndException(message=str(meta), exception=error)
    if isinstance(meta, BaseException):
        return FromException(exception=meta)
    if isinstance(meta, Mapping):
        return FromPartialDetails(details=meta)
    if isinstance(meta, str):
        return FromMessage(message=meta)
    raise TypeError(f"Unsupported error report of type {type(meta).__name__}")
