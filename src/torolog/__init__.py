"""
torolog: a typed structured logging facade.

Events are written one JSON object per line::

    {"level":"info","data":[{"foo":"bar"},{"n":999}],"message":"hello"}

Library: structlog for the event pipeline, orjson for serialization.
"""

from .config import LoggingSettings
from .core import Logger, from_settings, new, new_with_level
from .exceptions import InvalidLevelError, PanicError, TorologError
from .fields import FIELDS_KEY, ArrayMarshaler, Field, Fields, ObjectMarshaler
from .levels import Level

__all__ = [
    "FIELDS_KEY",
    "ArrayMarshaler",
    "Field",
    "Fields",
    "InvalidLevelError",
    "Level",
    "Logger",
    "LoggingSettings",
    "ObjectMarshaler",
    "PanicError",
    "TorologError",
    "from_settings",
    "new",
    "new_with_level",
]
