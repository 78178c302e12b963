"""
Rich logging for leafpress.

Library modules only call ``logging.getLogger(__name__)``; applications that
want readable console output call :func:`setup_logging` once.
"""

import logging
import sys

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "leafpress"

_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _resolve_level(level: str) -> int:
    if level.upper() not in _LEVELS:
        raise ValueError(f"Invalid log level: {level}")
    return getattr(logging, level.upper())


def setup_logging(level: str = "INFO", use_rich: bool = True, console: Console = None) -> logging.Logger:
    """
    Setup logging for the leafpress package.

    Args:
        level: Log level
        use_rich: Whether to use rich logging
        console: Console to print to (rich only)

    Returns:
        The configured ``leafpress`` logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(_resolve_level(level))
    logger.handlers.clear()

    if use_rich:
        handler = RichHandler(
            console=console or Console(stderr=True),
            show_time=True,
            show_path=True,
            markup=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter(fmt="%(message)s", datefmt="[%X]"))
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        ))

    logger.addHandler(handler)
    logger.propagate = False
    logger.debug("Logging initialized at %s level", level.upper())
    return logger
