"""Tests for logging_utils module processors and configuration."""

from __future__ import annotations

import logging
from typing import Any, Generator
from unittest.mock import Mock, patch

import pytest
import structlog

from build_reporter.config import ReporterSettings
from build_reporter.logging_utils import (
    PACKAGE_LOGGER_NAME,
    add_reporter_context,
    add_trace_context,
    configure_reporter_logging,
    create_reporter_logger,
)


@pytest.fixture(autouse=True)
def clean_logging_config() -> Generator[None, None, None]:
    """Clean up logging configuration after each test to prevent pollution."""
    yield

    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    package_logger.handlers.clear()
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True
    structlog.reset_defaults()


class TestAddReporterContext:
    """Tests for the add_reporter_context processor."""

    def test_adds_service_name_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("REPORTER_SERVICE_NAME", "site-builder")
        event_dict: dict[str, Any] = {"event": "test message"}

        result = add_reporter_context(None, "", event_dict)

        assert result["service.name"] == "site-builder"

    def test_adds_command_when_known(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("REPORTER_EXECUTING_COMMAND", "build")

        result = add_reporter_context(None, "info", {"event": "x"})

        assert result["reporter.command"] == "build"

    def test_defaults_without_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("REPORTER_SERVICE_NAME", raising=False)
        monkeypatch.delenv("REPORTER_EXECUTING_COMMAND", raising=False)

        result = add_reporter_context(None, "info", {"event": "x", "level": "info"})

        assert result["service.name"] == "build-reporter"
        assert "reporter.command" not in result
        assert result["level"] == "info"


class TestAddTraceContext:
    """Tests for the add_trace_context processor."""

    def test_adds_ids_when_span_active(self) -> None:
        mock_span_context = Mock()
        mock_span_context.is_valid = True
        mock_span_context.trace_id = 0x1234567890ABCDEF1234567890ABCDEF
        mock_span_context.span_id = 1

        mock_span = Mock()
        mock_span.get_span_context.return_value = mock_span_context

        with patch("build_reporter.logging_utils.get_current_span", return_value=mock_span):
            result = add_trace_context(None, "", {"event": "x"})

        assert result["trace_id"] == "1234567890abcdef1234567890abcdef"
        assert result["span_id"] == "0000000000000001"

    def test_no_ids_without_active_span(self) -> None:
        result = add_trace_context(None, "", {"event": "x"})

        assert "trace_id" not in result
        assert "span_id" not in result


class TestConfigureReporterLogging:
    def test_package_logger_does_not_propagate(self) -> None:
        configure_reporter_logging(ReporterSettings(LOG_LEVEL="DEBUG"))

        package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
        assert package_logger.propagate is False
        assert len(package_logger.handlers) == 1
        assert package_logger.level == logging.DEBUG

    def test_reconfiguring_does_not_stack_handlers(self) -> None:
        configure_reporter_logging(ReporterSettings())
        configure_reporter_logging(ReporterSettings(NO_COLOR=True))

        assert len(logging.getLogger(PACKAGE_LOGGER_NAME).handlers) == 1

    def test_json_format_uses_json_renderer(self) -> None:
        configure_reporter_logging(ReporterSettings(LOG_FORMAT="json"))

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_console_format_respects_no_color(self) -> None:
        configure_reporter_logging(ReporterSettings(NO_COLOR=True))

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)


def test_create_reporter_logger_namespaces_name() -> None:
    configure_reporter_logging(ReporterSettings())

    logger = create_reporter_logger("activity")

    assert logger.bind().name == f"{PACKAGE_LOGGER_NAME}.activity"
