"""
Known error definitions, keyed by error identifier.

Each definition supplies the severity, category and a text generator that
turns the caller's context into display text. The entry under the empty
identifier is the default used for missing or unknown identifiers.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from textwrap import dedent
from typing import Any

from build_reporter.enums import ErrorCategory, ErrorLevel

TextGenerator = Callable[[Mapping[str, Any]], str]


@dataclass(frozen=True)
class ErrorDefinition:
    text: TextGenerator
    level: ErrorLevel = ErrorLevel.ERROR
    category: ErrorCategory | None = None
    docs_url: str | None = None


def _source_message(context: Mapping[str, Any]) -> str:
    return str(context.get("sourceMessage", ""))


ERROR_MAP: dict[str, ErrorDefinition] = {
    "": ErrorDefinition(text=_source_message),
    "85901": ErrorDefinition(
        text=lambda context: dedent(
            """\
            There was an error in your GraphQL query:

            {message}"""
        ).format(message=context.get("sourceMessage", "")),
        category=ErrorCategory.GRAPHQL,
    ),
    "85923": ErrorDefinition(
        text=lambda context: (
            f'There was an error in your GraphQL query:\n\nCannot query field '
            f'"{context.get("field", "")}" on type "{context.get("type", "")}".'
        ),
        category=ErrorCategory.GRAPHQL,
    ),
    "10123": ErrorDefinition(
        text=lambda context: (
            f"We encountered an error while trying to load your site's "
            f"{context.get('configName', 'config')}. Please fix the error and try again."
        ),
        category=ErrorCategory.CONFIG,
    ),
    "11321": ErrorDefinition(
        text=lambda context: (
            f'"{context.get("pluginName", "unknown")}" threw an error while running '
            f"the {context.get('api', 'unknown')} lifecycle:\n\n{_source_message(context)}"
        ),
        category=ErrorCategory.PLUGIN,
    ),
    "95312": ErrorDefinition(
        text=lambda context: (
            f'"{context.get("ref", "")}" is not available during server side rendering.'
        ),
        category=ErrorCategory.HTML_COMPILATION,
        docs_url="https://gatsby.dev/debug-html",
    ),
    "95313": ErrorDefinition(
        text=lambda context: (
            "Building static HTML failed"
            + (f' for path "{context["path"]}"' if context.get("path") else "")
        ),
        category=ErrorCategory.HTML_COMPILATION,
        docs_url="https://gatsby.dev/debug-html",
    ),
    "98123": ErrorDefinition(
        text=lambda context: (
            f"{context.get('stageLabel', 'Build')} failed\n\n{_source_message(context)}"
        ),
        category=ErrorCategory.WEBPACK,
    ),
    "98124": ErrorDefinition(
        text=lambda context: (
            f"{context.get('stageLabel', 'Build')} failed\n\n{_source_message(context)}\n\n"
            "If you're trying to use a package make sure that it is installed."
        ),
        category=ErrorCategory.WEBPACK,
    ),
}

DEFAULT_ERROR: ErrorDefinition = ERROR_MAP[""]


def get_error_definition(
    identifier: str | None,
    error_map: Mapping[str, ErrorDefinition] = ERROR_MAP,
) -> ErrorDefinition | None:
    """Return the definition registered for ``identifier`` or None on a lookup miss."""
    if not isinstance(identifier, str) or not identifier:
        return None
    return error_map.get(identifier)
