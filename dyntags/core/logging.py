#!/usr/bin/env python3
"""Structured logging for dyntags.

Log calls take key-value context that is rendered after the message as
``msg | key=value``. Values containing whitespace are quoted, since folder
names usually do:

    >>> logger = Logger(level=LogLevel.DEBUG)
    >>> logger.debug("Rule matched", rule="projects", confidence=0.8)
    >>> with logger.add_context(input="Projects/My App"):
    ...     logger.debug("Mapped folder to tag", tag="#projects/my-app")

The second call renders as
``Mapped folder to tag | input='Projects/My App' tag=#projects/my-app``.
Context pushed with add_context() is thread-local.
"""

import logging
import logging.handlers
import threading
from contextlib import contextmanager
from enum import IntEnum
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Union

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"

_local = threading.local()


class LogLevel(IntEnum):
    """Log levels matching Python's logging module."""

    DEBUG = logging.DEBUG  # 10
    INFO = logging.INFO  # 20
    WARNING = logging.WARNING  # 30
    ERROR = logging.ERROR  # 40
    CRITICAL = logging.CRITICAL  # 50


def _context_frames() -> List[Dict[str, Any]]:
    if not hasattr(_local, "frames"):
        _local.frames = []
    return _local.frames


def render_value(value: Any) -> str:
    """Render one context value, quoting strings that are empty or contain whitespace."""
    if isinstance(value, str) and (not value or any(c.isspace() for c in value)):
        return repr(value)
    return str(value)


def render_message(msg: str, context: Dict[str, Any]) -> str:
    if not context:
        return msg
    return f"{msg} | " + " ".join(f"{k}={render_value(v)}" for k, v in context.items())


class Logger:
    """Structured logger for matching and mapping diagnostics."""

    def __init__(
        self,
        name: str = "dyntags",
        level: Union[LogLevel, str] = LogLevel.WARNING,
        handlers: Optional[List[logging.Handler]] = None,
    ):
        """Initialize logger.

        Args:
            name: Logger name for identification
            level: Minimum log level to output
            handlers: Handlers replacing the default stderr handler
        """
        self.name = name
        self.logger = logging.getLogger(name)
        self.set_level(level)

        if handlers is None:
            handlers = [self._create_console_handler()]

        self.logger.handlers.clear()
        for handler in handlers:
            self.logger.addHandler(handler)

        self.logger.propagate = False

    def _create_console_handler(self) -> logging.StreamHandler:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(DEFAULT_FORMAT, datefmt=DEFAULT_DATEFMT))
        return handler

    def create_file_handler(
        self,
        filename: Union[str, Path],
        max_bytes: int = 1024 * 1024,
        backup_count: int = 3,
    ) -> logging.handlers.RotatingFileHandler:
        """Create a rotating UTF-8 file handler for the --log-file option.

        Args:
            filename: Path to log file
            max_bytes: Maximum size before rotation
            backup_count: Number of backup files to keep
        """
        handler = logging.handlers.RotatingFileHandler(
            filename, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
        )
        handler.setFormatter(logging.Formatter(DEFAULT_FORMAT, datefmt=DEFAULT_DATEFMT))
        return handler

    def add_handler(self, handler: logging.Handler) -> None:
        self.logger.addHandler(handler)

    def remove_handler(self, handler: logging.Handler) -> None:
        self.logger.removeHandler(handler)

    def set_level(self, level: Union[LogLevel, str]) -> None:
        """Set the minimum log level.

        Raises:
            KeyError: If a level name is unknown
        """
        if isinstance(level, str):
            level = LogLevel[level.upper()]
        self.logger.setLevel(level)

    def get_level(self) -> LogLevel:
        return LogLevel(self.logger.level)

    def current_context(self) -> Dict[str, Any]:
        """Merge the context pushed by enclosing add_context() blocks, innermost last."""
        context: Dict[str, Any] = {}
        for frame in _context_frames():
            context.update(frame)
        return context

    @contextmanager
    def add_context(self, **kwargs) -> Iterator[None]:
        """Attach context to every message logged inside the block.

        Example:
            >>> with logger.add_context(rule="projects"):
            ...     logger.debug("Evaluating")
        """
        frames = _context_frames()
        frames.append(kwargs)
        try:
            yield
        finally:
            frames.pop()

    def _log(self, level: LogLevel, msg: str, context: Dict[str, Any]) -> None:
        if not self.logger.isEnabledFor(level):
            return
        combined = self.current_context()
        combined.update(context)
        self.logger.log(level, render_message(msg, combined), extra={"context": combined})

    def debug(self, msg: str, **context) -> None:
        self._log(LogLevel.DEBUG, msg, context)

    def info(self, msg: str, **context) -> None:
        self._log(LogLevel.INFO, msg, context)

    def warning(self, msg: str, **context) -> None:
        self._log(LogLevel.WARNING, msg, context)

    def error(self, msg: str, **context) -> None:
        self._log(LogLevel.ERROR, msg, context)


# Global logger instance
_global_logger: Optional[Logger] = None


def get_logger(name: str = "dyntags") -> Logger:
    """Get the shared logger, creating it (quiet, at WARNING) on first use.

    Asking for a different name replaces the shared instance.
    """
    global _global_logger
    if _global_logger is None or _global_logger.name != name:
        _global_logger = Logger(name=name)
    return _global_logger


def set_global_logger(logger: Logger) -> None:
    """Install the logger returned by get_logger(), e.g. after CLI setup."""
    global _global_logger
    _global_logger = logger
