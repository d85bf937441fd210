"""
Application logging utilities for the talent scorer.

Configures the ``talent_scorer`` and ``question_bank`` loggers with a console
handler: Rich output in dev mode, a plain stream handler otherwise.
"""

import logging
import sys
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme


# Custom theme for log levels
_LOG_THEME = Theme({
    "logging.level.debug": "dim cyan",
    "logging.level.info": "green",
    "logging.level.warning": "yellow",
    "logging.level.error": "bold red",
    "logging.level.critical": "bold white on red",
    "log.time": "dim",
    "log.message": "default",
    "log.path": "dim",
})

# Shared console instance with custom theme
_console = Console(theme=_LOG_THEME, stderr=True)

ROOT_LOGGER_NAME = 'talent_scorer'
# Loaders live in their own package but log in the same style
BANK_LOGGER_NAME = 'question_bank'


def setup_logging(
    level: str = 'INFO',
    log_format: Optional[str] = None,
    show_path: bool = False,
    show_time: bool = True,
    dev_mode: bool = True,
) -> None:
    """
    Setup console logging for the scorer and the bank loaders.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Format string for the plain handler. If None, uses default format.
        show_path: Whether to show file path in Rich output (default: False)
        show_time: Whether to show timestamp in Rich output (default: True)
        dev_mode: Whether to use Rich console output (default: True)
    """
    if log_format is None:
        log_format = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

    level_value = getattr(logging, level.upper())

    def build_handler() -> logging.Handler:
        if dev_mode:
            handler: logging.Handler = RichHandler(
                console=_console,
                level=level_value,
                show_time=show_time,
                show_path=show_path,
                rich_tracebacks=True,
                markup=False,
            )
        else:
            handler = logging.StreamHandler(sys.stderr)
            handler.setFormatter(logging.Formatter(log_format))
        handler.setLevel(level_value)
        return handler

    def configure_logger(logger_name: str) -> None:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level_value)
        logger.handlers.clear()
        logger.addHandler(build_handler())
        # Prevent propagation to root logger
        logger.propagate = False

    configure_logger(ROOT_LOGGER_NAME)
    configure_logger(BANK_LOGGER_NAME)


# Library default: silent until the application configures logging
logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())
logging.getLogger(BANK_LOGGER_NAME).addHandler(logging.NullHandler())
