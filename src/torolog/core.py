"""
The Logger facade.

A ``Logger`` owns one structlog ``EventLogger`` bound to an output stream
and the minimum level it was built with. Emit calls are synchronous, write
at most one JSON line, and never report failure to the caller.
"""

from __future__ import annotations

import sys
from typing import Any

from .config import LoggingSettings
from .fields import FIELDS_KEY, FieldsLike, as_fields
from .levels import Level
from .processors import EventLogger, build_event_logger


class Logger:
    """Leveled, structured logger writing one JSON object per line.

    Build instances with :func:`new` or :func:`new_with_level`.
    """

    __slots__ = ("_log", "_level")

    def __init__(self, log: EventLogger, level: Level = Level.NO_LEVEL) -> None:
        self._log = log
        self._level = level

    def __repr__(self) -> str:
        return f"<Logger level={self._level.name}>"

    def get_level(self) -> Level:
        """Return the minimum level recorded at construction."""
        return self._level

    def log(self, msg: str, fields: FieldsLike = None) -> None:
        """Log a message without a level."""
        self._log.log(msg, **{FIELDS_KEY: as_fields(fields)})

    def trace(self, msg: str, err: BaseException | None = None, fields: FieldsLike = None) -> None:
        self._log.trace(msg, error=err, **{FIELDS_KEY: as_fields(fields)})

    def debug(self, msg: str, fields: FieldsLike = None) -> None:
        self._log.debug(msg, **{FIELDS_KEY: as_fields(fields)})

    def info(self, msg: str, fields: FieldsLike = None) -> None:
        self._log.info(msg, **{FIELDS_KEY: as_fields(fields)})

    def warn(self, msg: str, fields: FieldsLike = None) -> None:
        self._log.warn(msg, **{FIELDS_KEY: as_fields(fields)})

    def error(self, msg: str, err: BaseException | None = None, fields: FieldsLike = None) -> None:
        self._log.error(msg, error=err, **{FIELDS_KEY: as_fields(fields)})

    def fatal(self, msg: str, err: BaseException | None = None, fields: FieldsLike = None) -> None:
        """Log at fatal level, then exit the process with status 1."""
        self._log.fatal(msg, error=err, **{FIELDS_KEY: as_fields(fields)})

    def panic(self, msg: str, err: BaseException | None = None, fields: FieldsLike = None) -> None:
        """Log at panic level, then raise :class:`~torolog.exceptions.PanicError`."""
        self._log.panic(msg, error=err, **{FIELDS_KEY: as_fields(fields)})


def new(output: Any) -> Logger:
    """Create a Logger writing to ``output`` with no minimum level."""
    return Logger(build_event_logger(output), Level.NO_LEVEL)


def new_with_level(output: Any, level: Level | int) -> Logger:
    """Create a Logger writing to ``output`` that drops events below ``level``.

    Levels outside [TRACE, NO_LEVEL] fall back to :func:`new`.
    """
    if not Level.is_valid(level):
        return new(output)
    level = Level(level)
    return Logger(build_event_logger(output, level), level)


def from_settings(settings: LoggingSettings | None = None) -> Logger:
    """Create a Logger over stdout or stderr as configured by ``TOROLOG_*``."""
    settings = settings or LoggingSettings()
    stream = sys.stderr if settings.stream == "stderr" else sys.stdout
    return new_with_level(stream, settings.level)
