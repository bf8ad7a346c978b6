"""Logging setup for the command-line tools."""

import logging
from typing import Union

from rich.console import Console
from rich.logging import RichHandler


def setup_logger(name: str, level: Union[str, int] = "INFO") -> logging.Logger:
    """
    Configure a logger that writes through rich to stderr.

    Calling it again for the same name replaces the handler instead of
    stacking another one.

    Args:
        name: Logger name (usually the tool's package)
        level: Log level name or number

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(level.upper() if isinstance(level, str) else level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = RichHandler(console=Console(stderr=True), show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.propagate = False

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a module logger."""
    return logging.getLogger(name)
