"""Console logging for the command line interface."""

from __future__ import annotations

import logging

import click

PACKAGE_LOGGER_NAME = "schema_cli_args"
_LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


class ClickEchoHandler(logging.Handler):
    """Writes records to the stderr stream click is currently using."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            click.echo(self.format(record), err=True)
        except Exception:  # pylint: disable=broad-exception-caught
            self.handleError(record)


def configure_logging(verbose: bool = False, quiet: bool = False) -> logging.Logger:
    """Attach a stderr handler to the package logger.

    ``verbose`` selects DEBUG, ``quiet`` selects ERROR, otherwise WARNING.
    Calling it again replaces the handler installed by the previous call.
    """
    if verbose and quiet:
        raise ValueError("verbose and quiet are mutually exclusive.")
    level = logging.DEBUG if verbose else logging.ERROR if quiet else logging.WARNING

    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    for existing in list(package_logger.handlers):
        if isinstance(existing, ClickEchoHandler):
            package_logger.removeHandler(existing)

    handler = ClickEchoHandler()
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    return package_logger
