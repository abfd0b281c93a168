"""A logger that writes plain lines to a text stream, and its registration."""

from __future__ import annotations

import sys
import threading
import time
from typing import Any, Mapping, Optional, TextIO

from bkutil.conv import to_string
from bkutil.loggers import DEFAULT_LOGGER_NAME, Level
from bkutil.loggers import set_logger as _register


class StreamLogger:
    """Writes "PREFIX msg key=value ..." lines for messages at or above a level.

    With no stream the current ``sys.stderr`` is used at each write.
    """

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        level: Level = Level.INFO,
        *,
        timestamp: bool = False,
    ) -> None:
        self.stream = stream
        self.level = Level(level)
        self.timestamp = timestamp
        self._lock = threading.Lock()

    def log(
        self,
        level: Level,
        prefix: str,
        msg: str,
        fields: Optional[Mapping[str, Any]] = None,
    ) -> None:
        """Write one line if level is at least this logger's level."""
        if level < self.level:
            return
        parts = [prefix, msg]
        if fields:
            parts.extend(f"{key}={to_string(value)}" for key, value in fields.items())
        line = " ".join(parts)
        if self.timestamp:
            line = time.strftime("%Y/%m/%d %H:%M:%S ") + line
        if not line.endswith("\n"):
            line += "\n"
        with self._lock:
            stream = self.stream if self.stream is not None else sys.stderr
            stream.write(line)

    def trace(self, msg: str, fields: Optional[Mapping[str, Any]] = None) -> None:
        """Log at trace level."""
        self.log(Level.TRACE, "TRACE", msg, fields)

    def debug(self, msg: str, fields: Optional[Mapping[str, Any]] = None) -> None:
        """Log at debug level."""
        self.log(Level.DEBUG, "DEBUG", msg, fields)

    def info(self, msg: str, fields: Optional[Mapping[str, Any]] = None) -> None:
        """Log at info level."""
        self.log(Level.INFO, "INFO", msg, fields)

    def warn(self, msg: str, fields: Optional[Mapping[str, Any]] = None) -> None:
        """Log at warning level."""
        self.log(Level.WARN, "WARN", msg, fields)

    def error(self, msg: str, fields: Optional[Mapping[str, Any]] = None) -> None:
        """Log at error level."""
        self.log(Level.ERROR, "ERROR", msg, fields)


def set_logger(name: str, stream: Optional[TextIO], level: Level) -> StreamLogger:
    """Register a StreamLogger writing to stream under name, and return it."""
    logger = StreamLogger(stream, level)
    _register(name, logger)
    return logger


def ensure_default_logger(level: Level) -> StreamLogger:
    """Replace the default logger by one writing timestamped lines to stderr."""
    logger = StreamLogger(None, level, timestamp=True)
    _register(DEFAULT_LOGGER_NAME, logger)
    return logger