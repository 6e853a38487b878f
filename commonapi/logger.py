"""Process-wide logging with CommonAPI severity levels.

Messages go to standard error and, optionally, to a file opened in append
mode. Each line has the form ``[CAPI][LEVEL] message``.
"""

from __future__ import annotations

import sys
import threading
from enum import IntEnum
from typing import IO, Optional


class Level(IntEnum):
    """Severity of a log message; lower values are more severe."""

    NONE = 0
    FATAL = 1
    ERROR = 2
    WARNING = 3
    INFO = 4
    DEBUG = 5
    VERBOSE = 6


_LEVELS_BY_NAME = {
    "none": Level.NONE,
    "fatal": Level.FATAL,
    "error": Level.ERROR,
    "warning": Level.WARNING,
    "info": Level.INFO,
    "debug": Level.DEBUG,
    "verbose": Level.VERBOSE,
}


def level_from_string(text: str) -> Level:
    """Map a configuration name such as ``"debug"`` to a level; unknown names give INFO."""
    return _LEVELS_BY_NAME.get(text, Level.INFO)


class _LoggerState:
    def __init__(self) -> None:
        self.maximum_level = Level.INFO
        self.use_console = True
        self.use_dlt = False
        self.file: Optional[IO[str]] = None
        self.lock = threading.Lock()


_state = _LoggerState()


def init(use_console: bool, file_name: str, use_dlt: bool, level: str) -> None:
    """Configure the outputs and the maximum level that gets logged.

    An empty ``file_name`` leaves any previously opened log file in place.
    The trace-backend flag is recorded, but no such backend is available.
    """
    with _state.lock:
        _state.use_console = use_console
        _state.maximum_level = level_from_string(level)
        _state.use_dlt = use_dlt
        if file_name:
            if _state.file is not None:
                _state.file.close()
                _state.file = None
            try:
                _state.file = open(file_name, "a", encoding="utf-8")
            except OSError:
                _state.file = None


def is_logged(level: Level) -> bool:
    """Return whether messages of ``level`` are currently emitted."""
    return level <= _state.maximum_level


def _emit(level: Level, message: str) -> None:
    line = f"[CAPI][{level.name}] {message}"
    with _state.lock:
        if _state.use_console:
            print(line, file=sys.stderr, flush=True)
        if _state.file is not None and not _state.file.closed:
            _state.file.write(line + "\n")
            _state.file.flush()


def log(level: Level, *args: object) -> None:
    """Concatenate ``args`` and emit them at ``level`` if that level is enabled."""
    if is_logged(level):
        _emit(level, "".join(str(arg) for arg in args))


def fatal(*args: object) -> None:
    log(Level.FATAL, *args)


def error(*args: object) -> None:
    log(Level.ERROR, *args)


def warning(*args: object) -> None:
    log(Level.WARNING, *args)


def info(*args: object) -> None:
    log(Level.INFO, *args)


def debug(*args: object) -> None:
    log(Level.DEBUG, *args)


def verbose(*args: object) -> None:
    log(Level.VERBOSE, *args)