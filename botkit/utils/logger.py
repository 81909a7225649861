"""
Logging utilities for botkit.
Uses Rich for colored console output.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

from botkit.bot.config import config

# Custom theme for logging
CUSTOM_THEME = Theme({
    "logging.level.debug": "dim cyan",
    "logging.level.info": "blue",
    "logging.level.warning": "yellow",
    "logging.level.error": "red",
})

console = Console(theme=CUSTOM_THEME)


def setup_logging(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Set up a logger with RichHandler.

    Args:
        name: Logger name
        level: Logging level (default: DEBUG when config.DEBUG, else INFO)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    if level is None:
        level = logging.DEBUG if config.DEBUG else logging.INFO

    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers = []

    handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setLevel(level)

    formatter = logging.Formatter(
        fmt="[%(asctime)s] [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
    )
    handler.setFormatter(formatter)

    logger.addHandler(handler)

    return logger


# Convenience function
def get_logger(name: str) -> logging.Logger:
    """Get a logger instance."""
    return setup_logging(name)
