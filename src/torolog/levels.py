"""
Log levels.

The integer values are the ordering used by the level filter, so a
configured minimum compares directly against the level of each call.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any

from .exceptions import InvalidLevelError


class Level(IntEnum):
    """Ordered severity of a log event."""

    TRACE = -1
    DEBUG = 0
    INFO = 1
    WARN = 2
    ERROR = 3
    FATAL = 4
    PANIC = 5
    NO_LEVEL = 6  # no minimum configured

    def __str__(self) -> str:
        return _LEVEL_NAMES[self]

    @classmethod
    def is_valid(cls, value: Any) -> bool:
        """Return True if ``value`` is an int within [TRACE, NO_LEVEL]."""
        if not isinstance(value, int):
            return False
        return cls.TRACE <= value <= cls.NO_LEVEL

    @classmethod
    def parse(cls, text: str | int) -> Level:
        """Parse a level name such as ``"warn"`` or a decimal level number.

        An empty string means NO_LEVEL.
        """
        if isinstance(text, int):
            if cls.is_valid(text):
                return cls(text)
            raise InvalidLevelError(text)

        name = str(text).strip().lower()
        if name in _NAME_LEVELS:
            return _NAME_LEVELS[name]
        try:
            number = int(name)
        except ValueError:
            raise InvalidLevelError(text) from None
        if not cls.is_valid(number):
            raise InvalidLevelError(text)
        return cls(number)

    @classmethod
    def from_method(cls, method_name: str) -> Level | None:
        """Level emitted by an engine method; None for the level-less ``log``."""
        return _NAME_LEVELS.get(method_name) if method_name else None


_LEVEL_NAMES = {
    Level.TRACE: "trace",
    Level.DEBUG: "debug",
    Level.INFO: "info",
    Level.WARN: "warn",
    Level.ERROR: "error",
    Level.FATAL: "fatal",
    Level.PANIC: "panic",
    Level.NO_LEVEL: "",
}

_NAME_LEVELS = {name: level for level, name in _LEVEL_NAMES.items()}
