"""
Process startup for the build reporter.

``bootstrap_reporter`` is the one place that touches process-wide state:
structlog configuration, the OpenTelemetry tracer provider, the shared
reporter instance and, when asked, the stdlib logging redirection.
"""

from __future__ import annotations

from build_reporter.config import ReporterSettings
from build_reporter.console_redirect import install_global_log_redirection
from build_reporter.logging_utils import configure_reporter_logging, create_reporter_logger
from build_reporter.observability.tracing import init_tracing
from build_reporter.reporter import Reporter, set_reporter

logger = create_reporter_logger("bootstrap")


def bootstrap_reporter(
    settings: ReporterSettings | None = None,
    redirect_logging: bool = False,
) -> Reporter:
    """
    Configure logging and tracing, then install the process-wide reporter.

    Args:
        settings: Reporter settings (defaults to values read from the environment)
        redirect_logging: Route root stdlib logging through the new reporter

    Returns:
        The reporter now returned by ``get_reporter()``
    """
    if settings is None:
        settings = ReporterSettings()

    configure_reporter_logging(settings)
    tracer = init_tracing(settings.SERVICE_NAME, exporter=settings.TRACE_EXPORTER)

    reporter = Reporter(settings=settings, tracer=tracer)
    reporter.set_verbose(settings.VERBOSE)
    set_reporter(reporter)

    if redirect_logging:
        install_global_log_redirection(reporter)

    logger.debug(
        "Reporter bootstrapped",
        command=settings.EXECUTING_COMMAND,
        redirect_logging=redirect_logging,
    )
    return reporter
