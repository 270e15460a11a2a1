"""
Route the process's stdlib logging output through a reporter.

Installation is an explicit startup step; importing the package changes
nothing. The handler lives on the root logger for the rest of the process
unless removed with ``uninstall_global_log_redirection``.
"""

from __future__ import annotations

import logging

from build_reporter.error_handling.error_inputs import FromMessage, FromMessageAndException
from build_reporter.logging_utils import PACKAGE_LOGGER_NAME
from build_reporter.reporter import Reporter


class ReporterLogHandler(logging.Handler):
    """Forwards log records to the reporter method matching their level."""

    def __init__(self, reporter: Reporter) -> None:
        super().__init__()
        self.reporter = reporter
        self.replaced_handlers: list[logging.Handler] = []

    def filter(self, record: logging.LogRecord) -> bool:
        # Reporter's own output must not be fed back into it
        name = record.name
        if name == PACKAGE_LOGGER_NAME or name.startswith(f"{PACKAGE_LOGGER_NAME}."):
            return False
        return super().filter(record)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = record.getMessage()
        except Exception:
            self.handleError(record)
            return

        if record.levelno >= logging.ERROR:
            exception = record.exc_info[1] if record.exc_info else None
            if exception is not None:
                self.reporter.error(
                    FromMessageAndException(
                        message=message or str(exception) or record.levelname,
                        exception=exception,
                    )
                )
            else:
                self.reporter.error(FromMessage(message=message or record.levelname))
        elif record.levelno >= logging.WARNING:
            self.reporter.warn(message)
        elif record.levelno >= logging.INFO:
            self.reporter.info(message)
        elif record.levelno >= logging.DEBUG:
            self.reporter.verbose(message)
        else:
            self.reporter.log(message)


def _installed_handler() -> ReporterLogHandler | None:
    for handler in logging.root.handlers:
        if isinstance(handler, ReporterLogHandler):
            return handler
    return None


def install_global_log_redirection(reporter: Reporter) -> ReporterLogHandler:
    """
    Redirect root logging and ``warnings.warn`` output through ``reporter``.

    Re-applying is a no-op and returns the handler already installed.
    Existing root handlers are set aside so each record is written once;
    ``uninstall_global_log_redirection`` puts them back.
    """
    existing = _installed_handler()
    if existing is not None:
        return existing

    handler = ReporterLogHandler(reporter)
    handler.replaced_handlers = list(logging.root.handlers)
    for replaced in handler.replaced_handlers:
        logging.root.removeHandler(replaced)
    logging.root.addHandler(handler)
    logging.root.setLevel(logging.NOTSET)
    logging.captureWarnings(True)
    return handler


def uninstall_global_log_redirection() -> None:
    handler = _installed_handler()
    if handler is not None:
        logging.root.removeHandler(handler)
        for replaced in handler.replaced_handlers:
            logging.root.addHandler(replaced)
    logging.captureWarnings(False)
