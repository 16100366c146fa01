"""Logging configuration for the ledgerflow CLI."""

import logging
import sys

import structlog


def configure_logging(verbose: bool = False) -> None:
    """Route structlog through the standard library logger on stderr.

    Args:
        verbose: Log at DEBUG level instead of WARNING
    """
    level = logging.DEBUG if verbose else logging.WARNING
    # force=True rebinds the handler to the current stderr on every call
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level, force=True)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
    )
