"""Logging setup shared by the checkping modules.

The status line owns stdout, so every log record goes to stderr through Rich.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "checkping"
FORMAT = "%(message)s"

console = Console(stderr=True)
logger = logging.getLogger(LOGGER_NAME)
logger.addHandler(logging.NullHandler())

_LEVELS = (logging.WARNING, logging.INFO, logging.DEBUG)


def level_for(verbosity: int) -> int:
    if verbosity <= 0:
        return _LEVELS[0]
    return _LEVELS[min(verbosity, len(_LEVELS) - 1)]


def configure_logging(verbosity: int = 0) -> logging.Logger:
    """Attach a RichHandler to the checkping logger.

    ``verbosity`` is the number of ``-v`` flags given on the command line.
    Calling this again only adjusts the level.
    """
    level = level_for(verbosity)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(
            console=console,
            rich_tracebacks=True,
            markup=True,
            show_time=False,
        )
        handler.setFormatter(logging.Formatter(FORMAT, datefmt="[%X]"))
        logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger
