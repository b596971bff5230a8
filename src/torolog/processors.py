"""
structlog wiring for torolog.

Builds the processor chain and the ``EventLogger`` wrapper class that sit
between the ``Logger`` facade and the output stream. structlog's output
loggers hold a per-file lock, so concurrent writers to one sink never
interleave within a line.
"""

from __future__ import annotations

import io
import sys
from collections.abc import Callable
from typing import Any

import orjson
import structlog
from structlog.typing import EventDict, Processor, WrappedLogger

from .exceptions import PanicError
from .fields import FIELDS_KEY, Field, Fields, as_fields, clean_text, encode_fields, encode_value, is_object_marshaler
from .levels import Level

ORJSON_OPTIONS = orjson.OPT_UTC_Z | orjson.OPT_NAIVE_UTC | orjson.OPT_NON_STR_KEYS

_KEY_ORDER = ("level", FIELDS_KEY, "error", "message")

# Raised by orjson (JSONEncodeError is a TypeError) or by encoding cyclic values.
_ENCODE_ERRORS = (TypeError, ValueError, RecursionError)


def orjson_dumps(v: Any, *, default: Any = None) -> str:
    """Fast JSON serialization using orjson."""
    return orjson.dumps(v, default=default, option=ORJSON_OPTIONS).decode()


def orjson_dumps_bytes(v: Any, *, default: Any = None) -> bytes:
    return orjson.dumps(v, default=default, option=ORJSON_OPTIONS)


def json_fallback(obj: Any) -> str:
    """Render values orjson cannot serialize by their string form."""
    try:
        return clean_text(str(obj))
    except Exception:
        return f"<unserializable: {type(obj).__name__}>"


def degrade_fields(fields: Any) -> Fields:
    """Replace every field value that cannot be rendered by its fallback string."""
    degraded = Fields()
    for field in as_fields(fields):
        try:
            value = encode_value(field.value)
            orjson.dumps(value, default=json_fallback, option=ORJSON_OPTIONS)
        except _ENCODE_ERRORS:
            value = json_fallback(field.value)
        degraded.append(Field(field.key, value))
    return degraded


# =============================================================================
# Structlog Processors
# =============================================================================


class LevelFilter:
    """Drop events below the configured minimum level.

    The level-less ``log`` method and a NO_LEVEL minimum never filter.
    """

    def __init__(self, min_level: Level = Level.NO_LEVEL) -> None:
        self.min_level = min_level

    def __call__(self, logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
        level = Level.from_method(method_name)
        if level is None or self.min_level == Level.NO_LEVEL:
            return event_dict
        if self.min_level > level:
            raise structlog.DropEvent
        return event_dict


def add_level_name(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Add the canonical level name; level-less events get none."""
    level = Level.from_method(method_name)
    if level is not None:
        event_dict["level"] = str(level)
    return event_dict


def encode_data(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Render the field list as an array of single-key objects, always present."""
    event_dict[FIELDS_KEY] = encode_fields(event_dict.get(FIELDS_KEY))
    return event_dict


def format_error(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Render the attached error, dropping the key when no error was given."""
    err = event_dict.pop("error", None)
    if err is None:
        return event_dict
    if is_object_marshaler(err):
        event_dict["error"] = encode_value(err)
    else:
        event_dict["error"] = json_fallback(err)
    return event_dict


def rename_event_key(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Rename 'event' to 'message', omitting empty messages."""
    message = event_dict.pop("event", None)
    if message:
        event_dict["message"] = clean_text(message) if isinstance(message, str) else message
    return event_dict


def order_event_keys(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Lay keys out as level, data, error, message, then anything bound."""
    ordered = {key: event_dict.pop(key) for key in _KEY_ORDER if key in event_dict}
    ordered.update(event_dict)
    return ordered


def shared_processors(level: Level = Level.NO_LEVEL) -> list[Processor]:
    return [
        LevelFilter(level),
        add_level_name,
        encode_data,
        format_error,
        rename_event_key,
        order_event_keys,
    ]


# =============================================================================
# Wrapper Class
# =============================================================================


class EventLogger(structlog.BoundLoggerBase):
    """Bound logger with one method per torolog level.

    ``fatal`` exits the process and ``panic`` raises ``PanicError`` once
    their event has been written. Filtered events have no side effects.
    An event whose fields cannot be encoded is still written, with the
    offending values replaced by their string form.
    """

    def _emit(self, method_name: str, event: str | None, **event_kw: Any) -> bool:
        try:
            args, kw = self._process_event(method_name, event, event_kw)
        except structlog.DropEvent:
            return False
        except _ENCODE_ERRORS:
            event_kw[FIELDS_KEY] = degrade_fields(event_kw.get(FIELDS_KEY))
            args, kw = self._process_event(method_name, event, event_kw)
        self._logger.msg(*args, **kw)
        return True

    def log(self, event: str | None = None, **kw: Any) -> None:
        self._emit("log", event, **kw)

    def trace(self, event: str | None = None, **kw: Any) -> None:
        self._emit("trace", event, **kw)

    def debug(self, event: str | None = None, **kw: Any) -> None:
        self._emit("debug", event, **kw)

    def info(self, event: str | None = None, **kw: Any) -> None:
        self._emit("info", event, **kw)

    def warn(self, event: str | None = None, **kw: Any) -> None:
        self._emit("warn", event, **kw)

    def error(self, event: str | None = None, **kw: Any) -> None:
        self._emit("error", event, **kw)

    def fatal(self, event: str | None = None, **kw: Any) -> None:
        if self._emit("fatal", event, **kw):
            sys.exit(1)

    def panic(self, event: str | None = None, **kw: Any) -> None:
        if self._emit("panic", event, **kw):
            raise PanicError(event or "")


def build_event_logger(output: Any, level: Level = Level.NO_LEVEL) -> EventLogger:
    """Bind an ``EventLogger`` to ``output``.

    Text streams get a ``WriteLogger`` and a ``str`` renderer; anything else
    is treated as a binary stream and gets a ``BytesLogger``.
    """
    serializer: Callable[..., Any]
    if isinstance(output, io.TextIOBase):
        wrapped: WrappedLogger = structlog.WriteLogger(output)
        serializer = orjson_dumps
    else:
        wrapped = structlog.BytesLogger(output)
        serializer = orjson_dumps_bytes

    renderer = structlog.processors.JSONRenderer(serializer=serializer, default=json_fallback)
    return EventLogger(wrapped, processors=[*shared_processors(level), renderer], context={})
