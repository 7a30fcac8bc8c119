"""cmdkit configuration.

Environment variables (read only when a caller invokes ``load_config``):
    CMDKIT_LOG_LEVEL: Minimum console level
        - debug / verbose / warn / info / silent, case-insensitive
        - unset or unknown = info
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from enum import IntEnum

__all__ = ["Config", "LogLevel", "load_config"]

LOG_LEVEL_ENV = "CMDKIT_LOG_LEVEL"


class LogLevel(IntEnum):
    """Console levels, ordered DEBUG < VERBOSE < WARN < INFO < SILENT.

    A message at level M is printed iff M >= the configured level, so
    SILENT suppresses every leveled message.
    """

    DEBUG = 0
    VERBOSE = 1
    WARN = 2
    INFO = 3
    SILENT = 4

    @classmethod
    def from_string(cls, value: str) -> "LogLevel":
        """Parse a level name.

        Args:
            value: Level name, case-insensitive ("warning" is accepted for WARN)

        Returns:
            The matching LogLevel, INFO for unknown values
        """
        value = value.strip().upper()
        if value == "WARNING":
            return cls.WARN
        try:
            return cls[value]
        except KeyError:
            return cls.INFO


@dataclass
class Config:
    """cmdkit configuration.

    Attributes:
        log_level: Minimum console level
    """

    log_level: LogLevel = LogLevel.INFO


def load_config(environ: Mapping[str, str] | None = None) -> Config:
    """Build a Config from environment variables.

    Args:
        environ: Variables to read (None = os.environ)
    """
    if environ is None:
        environ = os.environ

    level = environ.get(LOG_LEVEL_ENV)
    return Config(
        log_level=LogLevel.from_string(level) if level else LogLevel.INFO,
    )
