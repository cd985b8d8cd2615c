"""Logging helpers shared by the compiler, CLI and service."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, MutableMapping, Tuple

_ROOT = "pagebuilder"
_CONSOLE_FORMAT = "[pagebuilder] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``pagebuilder.<name>`` (or the package logger itself)."""
    return logging.getLogger(f"{_ROOT}.{name}" if name else _ROOT)


class TargetLogger(logging.LoggerAdapter):
    """Prefix every message with the export target being compiled."""

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> Tuple[Any, MutableMapping[str, Any]]:
        return f"[{self.extra['target']}] {msg}", kwargs


def target_logger(name: str, target: str) -> TargetLogger:
    return TargetLogger(get_logger(name), {"target": target})


def _handler(handler: logging.Handler, level: int, fmt: str) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Send package logs to stderr, and to ``log_file`` when given.

    Calling this again replaces the previously installed handlers.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_ROOT)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.addHandler(_handler(logging.StreamHandler(), level, _CONSOLE_FORMAT))
    if log_file is not None:
        logger.addHandler(
            _handler(logging.FileHandler(log_file, encoding="utf-8"), level, _FILE_FORMAT)
        )
    return logger


__all__ = ["TargetLogger", "configure_logging", "get_logger", "target_logger"]
