# src/tetris_ai/utils/logging.py
from __future__ import annotations

import logging

from rich.logging import RichHandler

_LEVELS = ("debug", "info", "warning", "error", "critical")


def _parse_level(level: str) -> int:
    name = str(level).strip().lower()
    if name not in _LEVELS:
        raise ValueError(f"unknown log level {level!r} (expected one of {', '.join(_LEVELS)})")
    return int(getattr(logging, name.upper()))


def _make_handler(use_rich: bool) -> logging.Handler:
    if use_rich:
        handler: logging.Handler = RichHandler(rich_tracebacks=True, show_time=True, show_level=True, show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        return handler
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("[%(asctime)s] %(levelname)s %(name)s: %(message)s"))
    return handler


def setup_logger(*, name: str, use_rich: bool = True, level: str = "info") -> logging.Logger:
    """
    Configure `name` with exactly one handler (rich console by default).
    Calling it again replaces the handler instead of stacking a second one.
    """
    logger = logging.getLogger(str(name))
    logger.setLevel(_parse_level(level))
    logger.handlers.clear()
    logger.addHandler(_make_handler(bool(use_rich)))
    logger.propagate = False
    return logger


__all__ = ["setup_logger"]
