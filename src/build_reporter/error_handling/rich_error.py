"""
Merge partial error details with their looked-up definition and validate
the result against the ``RichError`` schema.

The builder never terminates the process; an invalid record is raised as
``RichErrorValidationError`` and the caller decides what to do with it.
"""

from __future__ import annotations

import traceback
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from build_reporter.error_map import DEFAULT_ERROR, ERROR_MAP, ErrorDefinition, get_error_definition
from build_reporter.logging_utils import create_reporter_logger
from build_reporter.models.error_models import ErrorDetails, RichError, StackFrame

logger = create_reporter_logger("rich_error")

_PACKAGE_DIR = str(Path(__file__).resolve().parent.parent)


class RichErrorValidationError(Exception):
    """A merged error record does not satisfy the RichError schema."""

    def __init__(self, record: dict[str, Any], validation_error: ValidationError) -> None:
        self.record = record
        self.validation_error = validation_error
        super().__init__(f"Failed to validate error: {validation_error}")


def _is_package_frame(frame: traceback.FrameSummary) -> bool:
    return str(Path(frame.filename).resolve()).startswith(_PACKAGE_DIR)


def _frames_for(error: BaseException) -> list[traceback.FrameSummary]:
    if error.__traceback__ is not None:
        return list(traceback.extract_tb(error.__traceback__))
    # Never raised: attribute it to the code that reported it
    return [frame for frame in traceback.extract_stack() if not _is_package_frame(frame)]


def parse_stack(error: BaseException) -> tuple[StackFrame, ...]:
    """
    Parse an exception into stack frames, outermost call first.

    Column numbers are 1-based where the interpreter records them.
    """
    return tuple(
        StackFrame(
            function_name=frame.name,
            file_name=frame.filename,
            line_number=frame.lineno,
            column_number=frame.colno + 1 if frame.colno is not None else None,
        )
        for frame in _frames_for(error)
    )


def validate_rich_error(record: dict[str, Any]) -> RichError:
    try:
        return RichError.model_validate(record)
    except ValidationError as e:
        raise RichErrorValidationError(record, e) from e


def _resolve_definition(
    details: ErrorDetails, error_map: Mapping[str, ErrorDefinition]
) -> ErrorDefinition:
    definition = get_error_definition(details.id, error_map)
    if definition is None:
        if details.id:
            logger.debug("Unknown error id, using default definition", error_id=details.id)
        definition = error_map.get("", DEFAULT_ERROR)
    return definition


def build_rich_error(
    details: ErrorDetails,
    error_map: Mapping[str, ErrorDefinition] = ERROR_MAP,
) -> RichError:
    """
    Build a validated RichError from partial caller details.

    Caller-supplied fields (id, context, error, extra keys) are kept; level,
    category and docs URL always come from the definition. Caller text wins
    over the definition's generated text when it is non-empty.

    Raises:
        RichErrorValidationError: The merged record does not match the schema
    """
    definition = _resolve_definition(details, error_map)
    context = details.context

    if details.text:
        text = details.text
    else:
        text = definition.text(context if isinstance(context, Mapping) else {})

    error = details.error
    stack = parse_stack(error) if isinstance(error, BaseException) else ()

    record: dict[str, Any] = {
        **details.extras,
        "id": details.id,
        "context": context,
        "error": error,
        "file_path": details.file_path,
        "location": details.location,
        "level": definition.level,
        "category": definition.category,
        "docs_url": definition.docs_url,
        "text": text,
        "stack": stack,
    }
    return validate_rich_error(record)
