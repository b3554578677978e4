#!/usr/bin/env python3
"""Structured logging for SealKit.

Messages carry key=value context after a ``|`` separator. Context pushed
with ``Logger.add_context`` applies to every message logged on the same
thread until the block exits.

Transforms never log key material; only variant names, derived algorithm
identifiers and payload sizes appear in context.

Example:
    >>> logger = Logger(level=LogLevel.DEBUG)
    >>> with logger.add_context(command="decode"):
    ...     logger.warning("pipeline decode failed", error_code="DECODE_ERROR")
"""

import logging
import logging.handlers
import threading
from contextlib import contextmanager
from enum import IntEnum
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Union

from sealkit.core.config import get_config_manager
from sealkit.core.constants import LOGGER_NAME

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"


class LogLevel(IntEnum):
    """Log levels matching Python's logging module."""

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL


def parse_level(level: Union[LogLevel, int, str]) -> LogLevel:
    """Convert a level name ("debug", "WARNING") or number to LogLevel.

    Raises:
        ValueError: If the level is not one of the LogLevel members
    """
    if isinstance(level, str):
        try:
            return LogLevel[level.strip().upper()]
        except KeyError:
            raise ValueError(f"Invalid log level: {level}")
    return LogLevel(level)


def file_handler(
    filename: Union[str, Path],
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5,
) -> logging.handlers.RotatingFileHandler:
    """Create a rotating file handler using the SealKit format."""
    handler = logging.handlers.RotatingFileHandler(
        filename, maxBytes=max_bytes, backupCount=backup_count
    )
    handler.setFormatter(logging.Formatter(DEFAULT_FORMAT, datefmt=DEFAULT_DATEFMT))
    return handler


class Logger:
    """Structured logger with thread-local context."""

    _local = threading.local()

    def __init__(
        self,
        name: str = LOGGER_NAME,
        level: Union[LogLevel, int, str] = LogLevel.WARNING,
        handlers: Optional[List[logging.Handler]] = None,
    ):
        """Initialize logger.

        Args:
            name: Name of the underlying ``logging`` logger
            level: Minimum level to output
            handlers: Output handlers (default: stderr)
        """
        self.name = name
        self.logger = logging.getLogger(name)
        self.logger.propagate = False
        self.set_level(level)

        if handlers is None:
            console = logging.StreamHandler()
            console.setFormatter(logging.Formatter(DEFAULT_FORMAT, datefmt=DEFAULT_DATEFMT))
            handlers = [console]

        self.logger.handlers.clear()
        for handler in handlers:
            self.add_handler(handler)

    def add_handler(self, handler: logging.Handler) -> None:
        self.logger.addHandler(handler)

    def set_level(self, level: Union[LogLevel, int, str]) -> None:
        self.logger.setLevel(parse_level(level))

    def get_level(self) -> LogLevel:
        return LogLevel(self.logger.level)

    def _frames(self) -> List[Dict[str, Any]]:
        if not hasattr(self._local, "frames"):
            self._local.frames = []
        return self._local.frames

    @contextmanager
    def add_context(self, **context) -> Iterator[None]:
        """Attach context to every message logged inside the block."""
        frames = self._frames()
        frames.append(context)
        try:
            yield
        finally:
            frames.pop()

    def _emit(self, level: LogLevel, msg: str, context: Dict[str, Any]) -> None:
        if not self.logger.isEnabledFor(level):
            return

        merged: Dict[str, Any] = {}
        for frame in self._frames():
            merged.update(frame)
        merged.update(context)

        if merged:
            msg = f"{msg} | " + " ".join(f"{k}={v}" for k, v in merged.items())
        self.logger.log(level, msg, extra={"context": merged})

    def debug(self, msg: str, **context) -> None:
        self._emit(LogLevel.DEBUG, msg, context)

    def warning(self, msg: str, **context) -> None:
        self._emit(LogLevel.WARNING, msg, context)


_global_logger: Optional[Logger] = None


def get_logger(name: str = LOGGER_NAME) -> Logger:
    """Get or create the shared logger.

    The initial level comes from ``sealkit.logging.level``; an unknown
    level name falls back to WARNING so transform construction never fails
    on bad logging configuration.
    """
    global _global_logger
    if _global_logger is None or _global_logger.name != name:
        try:
            level = parse_level(get_config_manager().get("sealkit.logging.level", "WARNING"))
        except ValueError:
            level = LogLevel.WARNING
        _global_logger = Logger(name=name, level=level)
    return _global_logger


def set_global_logger(logger: Optional[Logger]) -> None:
    """Set (or reset with None) the global logger instance."""
    global _global_logger
    _global_logger = logger
