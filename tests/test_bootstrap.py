"""Tests for process startup wiring."""

from __future__ import annotations

from typing import Generator
from unittest.mock import MagicMock, patch

import pytest

from build_reporter.bootstrap import bootstrap_reporter
from build_reporter.config import ReporterSettings
from build_reporter.reporter import get_reporter


@pytest.fixture
def startup_mocks() -> Generator[dict[str, MagicMock], None, None]:
    """Patch the process-wide side effects of bootstrapping."""
    with (
        patch("build_reporter.bootstrap.configure_reporter_logging") as configure_logging,
        patch("build_reporter.bootstrap.init_tracing") as init_tracing,
        patch("build_reporter.bootstrap.install_global_log_redirection") as install_redirect,
    ):
        yield {
            "configure_logging": configure_logging,
            "init_tracing": init_tracing,
            "install_redirect": install_redirect,
        }


class TestBootstrapReporter:
    def test_configures_logging_and_tracing(self, startup_mocks: dict[str, MagicMock]) -> None:
        settings = ReporterSettings(SERVICE_NAME="site-builder", TRACE_EXPORTER="console")

        bootstrap_reporter(settings)

        startup_mocks["configure_logging"].assert_called_once_with(settings)
        startup_mocks["init_tracing"].assert_called_once_with("site-builder", exporter="console")

    def test_installs_process_reporter(self, startup_mocks: dict[str, MagicMock]) -> None:
        settings = ReporterSettings(EXECUTING_COMMAND="build", VERBOSE=True)

        reporter = bootstrap_reporter(settings)

        assert get_reporter() is reporter
        assert reporter.settings.is_build_mode
        startup_mocks["install_redirect"].assert_not_called()

    def test_optional_log_redirection(self, startup_mocks: dict[str, MagicMock]) -> None:
        reporter = bootstrap_reporter(ReporterSettings(), redirect_logging=True)

        startup_mocks["install_redirect"].assert_called_once_with(reporter)
