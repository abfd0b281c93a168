"""A process-wide registry of named loggers with aliases."""

from __future__ import annotations

import threading
from collections.abc import Mapping as _MappingABC
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, Mapping, Optional

DEFAULT_LOGGER_NAME = ""


class Level(IntEnum):
    """Log levels, from most to least verbose."""

    TRACE = 0
    DEBUG = 1
    INFO = 2
    WARN = 3
    ERROR = 4


@dataclass(frozen=True)
class NoopLogger:
    """A logger that checks its arguments and then discards every message."""

    def _discard(
        self, level: Level, msg: str, fields: Optional[Mapping[str, Any]]
    ) -> Level:
        """Check a message and its fields the way a real logger would, then drop it."""
        if not isinstance(msg, str):
            raise TypeError(f"log message must be a str, not {type(msg).__name__}")
        if fields is not None and not isinstance(fields, _MappingABC):
            raise TypeError(
                f"log fields must be a mapping, not {type(fields).__name__}"
            )
        return level

    def trace(self, msg: str, fields: Optional[Mapping[str, Any]] = None) -> None:
        """Discard a trace message."""
        self._discard(Level.TRACE, msg, fields)

    def debug(self, msg: str, fields: Optional[Mapping[str, Any]] = None) -> None:
        """Discard a debug message."""
        self._discard(Level.DEBUG, msg, fields)

    def info(self, msg: str, fields: Optional[Mapping[str, Any]] = None) -> None:
        """Discard an info message."""
        self._discard(Level.INFO, msg, fields)

    def warn(self, msg: str, fields: Optional[Mapping[str, Any]] = None) -> None:
        """Discard a warning."""
        self._discard(Level.WARN, msg, fields)

    def error(self, msg: str, fields: Optional[Mapping[str, Any]] = None) -> None:
        """Discard an error message."""
        self._discard(Level.ERROR, msg, fields)


_lock = threading.Lock()
_loggers: Dict[str, Any] = {DEFAULT_LOGGER_NAME: NoopLogger()}
_aliases: Dict[str, str] = {}


def get_logger(name: str) -> Any:
    """Return the logger registered under name or an alias of it, else the default."""
    with _lock:
        if name in _loggers:
            return _loggers[name]
        real_name = _aliases.get(name)
        if real_name is not None and real_name in _loggers:
            return _loggers[real_name]
        return _loggers.get(DEFAULT_LOGGER_NAME)


def set_logger(name: str, logger: Any) -> None:
    """Register logger under name."""
    with _lock:
        _loggers[name] = logger


def set_alias(name: str, *aliases: str) -> None:
    """Make each alias resolve to the logger called name."""
    with _lock:
        for alias in aliases:
            _aliases[alias] = name