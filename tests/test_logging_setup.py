"""Tests for logging setup."""

import logging
from logging.handlers import RotatingFileHandler

from rich.logging import RichHandler

from translate_text_ai.config import LoggingConfig
from translate_text_ai.logging_setup import setup_logging


def test_console_and_file_handlers(tmp_path):
    log_file = tmp_path / "logs" / "app.log"
    logger = setup_logging(LoggingConfig(level="debug", file=log_file))

    assert logger.name == "translate_text_ai"
    assert logger.level == logging.DEBUG
    assert [type(h) for h in logger.handlers] == [RichHandler, RotatingFileHandler]

    logging.getLogger("translate_text_ai.export.pdf").info("exported %d page(s)", 3)
    for handler in logger.handlers:
        handler.flush()
    assert "exported 3 page(s)" in log_file.read_text(encoding="utf-8")


def test_without_file():
    logger = setup_logging(LoggingConfig(file=None))
    assert len(logger.handlers) == 1


def test_repeated_setup_replaces_handlers(tmp_path):
    config = LoggingConfig(file=tmp_path / "app.log")
    setup_logging(config)
    logger = setup_logging(config)
    assert len(logger.handlers) == 2
