"""Leveled console output and fail-fast helpers for CLI tools.

Each Console owns its own level and error callback, so several consoles in
one process (for example across test cases) never interfere. Output goes
through a ``logging.StreamHandler`` owned by the Console. No ``Logger`` is
involved, so nothing reaches the root logger or the logger registry and the
Console level is the only gate.

Line format:
    debug / verbose / warn / info: "# <message>"
    eprintf and the default error report: "Error: <message>"
    printf / print_lines: "<message>"
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Callable
from typing import Any, NoReturn, TextIO

from .config import Config, LogLevel
from .errors import MissingFileError

__all__ = [
    "Console",
    "ErrorCallback",
    "fail",
    "success",
]

# (error, message) -> None; error is None for failed preconditions without one
ErrorCallback = Callable[[BaseException | None, str], None]

# Record levels for handler-side filters; gating happens in Console
_RECORD_LEVELS: dict[LogLevel, int] = {
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.VERBOSE: logging.DEBUG,
    LogLevel.WARN: logging.WARNING,
    LogLevel.INFO: logging.INFO,
}

_COMMENT_PREFIX = "# "
_ERROR_PREFIX = "Error: "


def success() -> NoReturn:
    """Terminate the hosting process with exit code 0."""
    sys.exit(0)


def fail() -> NoReturn:
    """Terminate the hosting process with exit code 1."""
    sys.exit(1)


class Console:
    """Leveled console bound to one output stream.

    Example:
        console = Console(load_config())
        console.verbose("building %s", target)
        console.fail_if(err, "cannot build %s", target)
    """

    def __init__(
        self,
        config: Config | None = None,
        *,
        on_error: ErrorCallback | None = None,
        stream: TextIO | None = None,
    ) -> None:
        config = config or Config()

        self._handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
        self._handler.setFormatter(logging.Formatter("%(prefix)s%(message)s"))

        self._level = LogLevel.INFO
        self.set_level(config.log_level)
        self._on_error: ErrorCallback | None = on_error or self._default_on_error

    @property
    def level(self) -> LogLevel:
        return self._level

    def set_level(self, level: LogLevel) -> None:
        """Set the minimum level for debug/verbose/warn/info output."""
        self._level = LogLevel(level)

    def is_enabled(self, level: LogLevel) -> bool:
        return level >= self._level and level != LogLevel.SILENT

    def set_on_error(self, callback: ErrorCallback | None) -> None:
        """Replace the error reporter. None disables reporting entirely."""
        self._on_error = callback

    # -- leveled output -------------------------------------------------

    def debug(self, fmt: str, *args: Any) -> None:
        self._log(LogLevel.DEBUG, fmt, args)

    def verbose(self, fmt: str, *args: Any) -> None:
        self._log(LogLevel.VERBOSE, fmt, args)

    def warn(self, fmt: str, *args: Any) -> None:
        self._log(LogLevel.WARN, fmt, args)

    def info(self, fmt: str, *args: Any) -> None:
        self._log(LogLevel.INFO, fmt, args)

    # -- unconditional output -------------------------------------------

    def printf(self, fmt: str, *args: Any) -> None:
        self._emit(logging.INFO, "", fmt, args)

    def eprintf(self, fmt: str, *args: Any) -> None:
        self._emit(logging.ERROR, _ERROR_PREFIX, fmt, args)

    def print_lines(self, *lines: str) -> None:
        for line in lines:
            self._emit(logging.INFO, "", "%s", (line,))

    # -- fail-fast ------------------------------------------------------

    def report_error(self, error: BaseException | None, fmt: str, *args: Any) -> None:
        """Hand a formatted message to the error callback, if any."""
        if self._on_error is not None:
            self._on_error(error, fmt % args if args else fmt)

    def fail_if(self, error: BaseException | None, fmt: str, *args: Any) -> bool:
        """Return True when error is None; otherwise report it and exit 1."""
        if error is None:
            return True
        self.report_error(error, fmt, *args)
        fail()

    def fail_if_not_exists(self, path: str | os.PathLike[str]) -> None:
        """Report and exit 1 when path does not exist."""
        if not os.path.exists(path):
            name = os.fspath(path)
            self.report_error(MissingFileError(name), "File '%s' is not found", name)
            fail()

    # -- internals ------------------------------------------------------

    def _default_on_error(self, error: BaseException | None, message: str) -> None:
        self._emit(logging.ERROR, _ERROR_PREFIX, "%s", (message,))

    def _log(self, level: LogLevel, fmt: str, args: tuple[Any, ...]) -> None:
        if not self.is_enabled(level):
            return
        self._emit(_RECORD_LEVELS[level], _COMMENT_PREFIX, fmt, args)

    def _emit(self, levelno: int, prefix: str, fmt: str, args: tuple[Any, ...]) -> None:
        record = logging.makeLogRecord({
            "name": "cmdkit.console",
            "levelno": levelno,
            "levelname": logging.getLevelName(levelno),
            "msg": fmt,
            "args": args,
            "prefix": prefix,
        })
        self._handler.handle(record)
