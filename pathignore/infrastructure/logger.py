#!/usr/bin/env python3
"""Structured logging for pathignore.

This module provides a structured logging system with:
- Multiple log levels (DEBUG, INFO, WARNING, ERROR)
- Structured context (key-value pairs)
- Console and rotating file handlers
- Thread-local context management
- An adapter turning engine diagnostics into log records

Example:
    >>> logger = Logger(level=LogLevel.INFO)
    >>> logger.info("Loaded pattern file", rules=12, path=".ignore")
    >>> processor = IgnoreProcessor(".", reporter=logger.report)
"""

import logging
import logging.handlers
import threading
from contextlib import contextmanager
from enum import IntEnum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pathignore.rules.engine import Diagnostic, DiagnosticLevel


class LogLevel(IntEnum):
    """Log levels matching Python's logging module."""

    DEBUG = logging.DEBUG  # 10
    INFO = logging.INFO  # 20
    WARNING = logging.WARNING  # 30
    ERROR = logging.ERROR  # 40
    CRITICAL = logging.CRITICAL  # 50


_DIAGNOSTIC_LEVELS = {
    DiagnosticLevel.INFO: LogLevel.INFO,
    DiagnosticLevel.WARNING: LogLevel.WARNING,
    DiagnosticLevel.ERROR: LogLevel.ERROR,
}

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"


class Logger:
    """Structured logger with context support.

    Key-value context passed to a call, or pushed with ``add_context``, is
    appended to the message as ``key=value`` pairs.
    """

    # Thread-local storage for context
    _context_stack = threading.local()

    def __init__(
        self,
        name: str = "pathignore",
        level: Union[LogLevel, str] = LogLevel.WARNING,
        handlers: Optional[List[logging.Handler]] = None,
    ):
        """Initialize logger.

        Args:
            name: Logger name for identification
            level: Minimum log level to output
            handlers: Optional list of logging handlers
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
        """Create default console handler (stderr) with formatting."""
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(DEFAULT_FORMAT, datefmt=DEFAULT_DATEFMT))
        return handler

    def create_file_handler(
        self,
        filename: Union[str, Path],
        max_bytes: int = 10 * 1024 * 1024,  # 10MB
        backup_count: int = 5,
    ) -> logging.handlers.RotatingFileHandler:
        """Create rotating file handler.

        Args:
            filename: Path to log file
            max_bytes: Maximum size before rotation
            backup_count: Number of backup files to keep

        Returns:
            Configured rotating file handler
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

        Args:
            level: New log level (LogLevel or string)
        """
        if isinstance(level, str):
            level = LogLevel[level.upper()]
        self.logger.setLevel(level)

    def get_level(self) -> LogLevel:
        return LogLevel(self.logger.level)

    def _get_context(self) -> Dict[str, Any]:
        """Get current thread-local context, merged across all levels."""
        if not hasattr(self._context_stack, "stack"):
            self._context_stack.stack = [{}]

        context = {}
        for ctx in self._context_stack.stack:
            context.update(ctx)
        return context

    def _format_message(self, msg: str, context: Dict[str, Any]) -> str:
        if context:
            ctx_str = " ".join(f"{k}={v}" for k, v in context.items())
            return f"{msg} | {ctx_str}"
        return msg

    @contextmanager
    def add_context(self, **kwargs):
        """Context manager to add temporary context.

        Example:
            >>> with logger.add_context(ignore_file=".ignore"):
            ...     logger.info("Loading rules")
        """
        if not hasattr(self._context_stack, "stack"):
            self._context_stack.stack = [{}]

        self._context_stack.stack.append(kwargs)
        try:
            yield
        finally:
            self._context_stack.stack.pop()

    def log(self, level: LogLevel, msg: str, **context) -> None:
        """Log a message at the given level with context."""
        if self.logger.isEnabledFor(level):
            combined_context = self._get_context()
            combined_context.update(context)
            formatted_msg = self._format_message(msg, combined_context)
            self.logger.log(level, formatted_msg, extra={"context": combined_context})

    def debug(self, msg: str, **context) -> None:
        self.log(LogLevel.DEBUG, msg, **context)

    def info(self, msg: str, **context) -> None:
        self.log(LogLevel.INFO, msg, **context)

    def warning(self, msg: str, **context) -> None:
        self.log(LogLevel.WARNING, msg, **context)

    def error(self, msg: str, **context) -> None:
        self.log(LogLevel.ERROR, msg, **context)

    def exception(self, msg: str, exc: Exception, **context) -> None:
        """Log exception with traceback.

        Args:
            msg: Log message
            exc: Exception to log
            **context: Additional context key-value pairs
        """
        combined_context = self._get_context()
        combined_context.update(context)
        combined_context["exception_type"] = type(exc).__name__
        combined_context["exception_message"] = str(exc)
        formatted_msg = self._format_message(msg, combined_context)
        self.logger.exception(formatted_msg, exc_info=exc, extra={"context": combined_context})

    def report(self, diagnostic: Diagnostic) -> None:
        """Log a pattern-file diagnostic; usable as an ``IgnoreProcessor`` reporter."""
        context: Dict[str, Any] = {}
        if diagnostic.line_number is not None:
            context["line"] = diagnostic.line_number
        if diagnostic.definition is not None:
            context["definition"] = diagnostic.definition
        self.log(_DIAGNOSTIC_LEVELS[diagnostic.level], diagnostic.message, **context)

    def is_enabled_for(self, level: Union[LogLevel, str]) -> bool:
        if isinstance(level, str):
            level = LogLevel[level.upper()]
        return self.logger.isEnabledFor(level)


def get_logger(
    name: str = "pathignore",
    level: Union[LogLevel, str] = LogLevel.WARNING,
    log_file: Optional[Union[str, Path]] = None,
) -> Logger:
    """Create a logger writing to stderr and, optionally, a rotating file.

    Args:
        name: Logger name
        level: Minimum log level
        log_file: Optional log file path

    Returns:
        Logger instance
    """
    logger = Logger(name=name, level=level)
    if log_file:
        logger.add_handler(logger.create_file_handler(log_file))
    return logger
