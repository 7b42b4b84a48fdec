import logging

from rich.console import Console
from rich.logging import RichHandler

from window_rules.constants import DEFAULT_LOG_LEVEL

PACKAGE_LOGGER = "window_rules"


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> logging.Logger:
    """Route package logs to stderr through rich; safe to call repeatedly."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level.upper())
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)
    logger.addHandler(
        RichHandler(
            console=Console(stderr=True),
            show_time=False,
            show_level=True,
            show_path=False,
        )
    )
    return logger
