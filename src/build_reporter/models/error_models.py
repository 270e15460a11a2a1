"""
Error records consumed and produced by the rich error pipeline.

``ErrorDetails`` is the loosely shaped caller input; ``RichError`` is the
schema every reported error must satisfy.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from build_reporter.enums import ErrorCategory, ErrorLevel


@dataclass
class ErrorDetails:
    """
    Partial error information as supplied by a reporting call site.

    Nothing here is validated; shape problems surface when the merged
    record is checked against ``RichError``.
    """

    id: Any = None
    text: Any = None
    context: Any = field(default_factory=dict)
    error: Any = None
    file_path: Any = None
    location: Any = None
    extras: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> ErrorDetails:
        known = {"id", "text", "context", "error", "file_path", "location"}
        values = {key: value for key, value in data.items() if key in known}
        extras = {key: value for key, value in data.items() if key not in known}
        if values.get("context") is None:
            values["context"] = {}
        return cls(**values, extras=extras)


class StackFrame(BaseModel):
    function_name: Optional[str] = None
    file_name: Optional[str] = None
    line_number: Optional[int] = None
    column_number: Optional[int] = None

    model_config = ConfigDict(frozen=True)


class Position(BaseModel):
    line: int
    column: Optional[int] = None

    model_config = ConfigDict(frozen=True)


class ErrorLocation(BaseModel):
    start: Position
    end: Optional[Position] = None

    model_config = ConfigDict(frozen=True)


class RichError(BaseModel):
    """
    A fully merged, validated error record.

    Unknown keys supplied by the caller are carried through as extra fields.
    """

    id: Optional[str] = None
    level: ErrorLevel
    category: Optional[ErrorCategory] = None
    text: str = Field(min_length=1)
    context: dict[str, Any] = Field(default_factory=dict)
    stack: tuple[StackFrame, ...] = ()
    error: Optional[BaseException] = None
    file_path: Optional[str] = None
    location: Optional[ErrorLocation] = None
    docs_url: Optional[str] = None

    model_config = ConfigDict(frozen=True, extra="allow", arbitrary_types_allowed=True)
