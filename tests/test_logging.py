# tests/test_logging.py
from __future__ import annotations

import logging

import pytest
from rich.logging import RichHandler

from tetris_ai.utils.logging import setup_logger


def test_rich_handler_installed_once() -> None:
    logger = setup_logger(name="tests.logging.rich", level="debug")
    logger = setup_logger(name="tests.logging.rich", level="DEBUG")
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0], RichHandler)
    assert logger.level == logging.DEBUG
    assert logger.propagate is False


def test_plain_handler_when_rich_disabled() -> None:
    logger = setup_logger(name="tests.logging.plain", use_rich=False, level="warning")
    assert len(logger.handlers) == 1
    assert not isinstance(logger.handlers[0], RichHandler)
    assert logger.level == logging.WARNING


def test_unknown_level_raises() -> None:
    with pytest.raises(ValueError, match="unknown log level"):
        setup_logger(name="tests.logging.bad", level="loud")
