"""Leveled logging to a process-wide logger."""

from __future__ import annotations

import abc
import datetime
import enum
import sys
import threading
from typing import Any, TextIO


class Level(enum.IntEnum):
    """Severity of a message, least severe first."""

    DEBUG = 0
    VERBOSE = 1
    INFO = 2
    ERROR = 3

    def indicator(self) -> str:
        return "DVIE"[self.value]


class Logger(abc.ABC):
    """Receives formatted log messages; implementations must be thread-safe."""

    @abc.abstractmethod
    def log(self, level: Level, fmt: str, message: str) -> None:
        """Record ``message``, formatted from ``fmt``."""


class StreamLogger(Logger):
    """Writes one line per message to a text stream."""

    def __init__(self, stream: TextIO, min_level: Level = Level.INFO):
        self.stream = stream
        self.min_level = min_level
        self._lock = threading.Lock()

    def log(self, level: Level, fmt: str, message: str) -> None:
        if level < self.min_level:
            return
        now = datetime.datetime.now()
        stamp = now.strftime("%H:%M:%S.") + f"{now.microsecond // 1000:03d}"
        with self._lock:
            self.stream.write(f"{level.indicator()}[{stamp}] {message}\n")
            self.stream.flush()


_current: Logger | None = None
_session_lock = threading.Lock()
_fallback_lock = threading.Lock()


class LoggingSession:
    """Makes a logger the process-wide one; only one may be active at a time."""

    def __init__(self, instance: Logger):
        global _current
        with _session_lock:
            if _current is not None:
                raise RuntimeError("a logging session is already active")
            _current = instance
        self._instance = instance
        self._closed = False

    def close(self) -> None:
        global _current
        with _session_lock:
            if not self._closed and _current is self._instance:
                _current = None
            self._closed = True

    def __enter__(self) -> LoggingSession:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def _dispatch(level: Level, fmt: str, args: tuple[Any, ...]) -> None:
    message = fmt.format(*args)
    with _session_lock:
        logger = _current
    if logger is not None:
        logger.log(level, fmt, message)
        return
    with _fallback_lock:
        sys.stderr.write(message + "\n")


def log(fmt: str, *args: Any) -> None:
    """Information important to understand a session."""
    _dispatch(Level.INFO, fmt, args)


def vlog(fmt: str, *args: Any) -> None:
    """Details for debugging."""
    _dispatch(Level.VERBOSE, fmt, args)


def elog(fmt: str, *args: Any) -> None:
    """Errors and warnings, usually shown to users."""
    _dispatch(Level.ERROR, fmt, args)


def error(fmt: str, *args: Any) -> RuntimeError:
    """An exception carrying the formatted message; it is neither raised nor logged."""
    return RuntimeError(fmt.format(*args) if args else fmt)