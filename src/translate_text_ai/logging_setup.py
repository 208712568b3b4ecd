"""
Logging setup for translate-text-ai.

Console output goes through rich; a rotating file keeps the full log.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler

from rich.console import Console
from rich.logging import RichHandler

from translate_text_ai.config import LoggingConfig

PACKAGE_LOGGER = "translate_text_ai"


def setup_logging(config: LoggingConfig, console: Console | None = None) -> logging.Logger:
    """
    Configure the package logger.

    Calling this again replaces the handlers installed by a previous call.

    Args:
        config: Logging section of the settings.
        console: Rich console for terminal output (stderr when omitted).

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    level = getattr(logging, config.level.upper(), logging.INFO)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    rich_handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    rich_handler.setLevel(level)
    logger.addHandler(rich_handler)

    if config.file is not None:
        config.file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            config.file,
            maxBytes=config.max_file_size_mb * 1024 * 1024,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(config.format))
        logger.addHandler(file_handler)

    return logger
