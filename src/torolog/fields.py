"""
Structured fields and their JSON projection.

Every event carries its fields under ``FIELDS_KEY`` as an array of
single-key objects, ``[{"key": value}, ...]``. The array keeps the
caller's order and tolerates duplicate keys without any merge policy.
"""

from __future__ import annotations

import base64
import re
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Protocol, runtime_checkable

FIELDS_KEY = "data"

_INT_MIN = -(2**63)
_UINT_MAX = 2**64 - 1

# Lone surrogates (e.g. from surrogateescape-decoded paths) are not valid UTF-8.
_SURROGATES = re.compile("[\ud800-\udfff]")


@runtime_checkable
class ObjectMarshaler(Protocol):
    """A value that renders itself as a JSON object."""

    def marshal_log_object(self) -> Mapping[str, Any]: ...


@runtime_checkable
class ArrayMarshaler(Protocol):
    """A value that renders itself as a JSON array."""

    def marshal_log_array(self) -> Iterable[Any]: ...


def is_object_marshaler(value: Any) -> bool:
    """True for marshaler instances; classes defining the method do not count."""
    return not isinstance(value, type) and isinstance(value, ObjectMarshaler)


def is_array_marshaler(value: Any) -> bool:
    return not isinstance(value, type) and isinstance(value, ArrayMarshaler)


def clean_text(value: str) -> str:
    """Replace lone surrogates with U+FFFD so the text encodes as UTF-8."""
    return _SURROGATES.sub("\ufffd", value)


@dataclass(frozen=True)
class Field:
    """A single key/value pair attached to an event."""

    key: str
    value: Any = None

    def marshal_log_object(self) -> dict[str, Any]:
        return {self.key: self.value}

    @classmethod
    def coerce(cls, item: Field | tuple[str, Any]) -> Field:
        if isinstance(item, Field):
            return item
        key, value = item
        return cls(key, value)


class Fields(list):
    """Ordered fields for one event.

    Accepts ``Field`` instances or ``(key, value)`` pairs::

        Fields([("foo", "bar"), Field("n", 999)])
    """

    def __init__(self, items: Iterable[Field | tuple[str, Any]] = ()) -> None:
        super().__init__(Field.coerce(item) for item in items)

    def marshal_log_array(self) -> Iterable[Field]:
        for item in self:
            yield Field.coerce(item)


FieldsLike = Iterable[Field | tuple[str, Any]] | None


def as_fields(fields: FieldsLike) -> Fields:
    if isinstance(fields, Fields):
        return fields
    return Fields(fields or ())


# =============================================================================
# Value Encoding
# =============================================================================


def _encode_int(value: int) -> Any:
    if _INT_MIN <= value <= _UINT_MAX:
        return value
    return str(value)


def _encode_bytes(value: bytes | bytearray | memoryview) -> str:
    return base64.b64encode(bytes(value)).decode("ascii")


def _encode_duration(value: timedelta) -> int:
    return (value.days * 86_400 + value.seconds) * 1_000_000_000 + value.microseconds * 1_000


def _encode_exception(value: BaseException) -> dict[str, Any]:
    message = clean_text(str(value))
    return {"message": message} if message else {}


def _encode_mapping(value: Mapping) -> dict[str, Any]:
    return {clean_text(str(k)): encode_value(v) for k, v in value.items()}


def _encode_sequence(value: Iterable[Any]) -> list[Any]:
    return [encode_value(v) for v in value]


# Checked along the value's MRO; anything unmatched is left to orjson.
_ENCODERS: dict[type, Callable[[Any], Any]] = {
    bool: lambda v: v,
    int: _encode_int,
    bytes: _encode_bytes,
    bytearray: _encode_bytes,
    memoryview: _encode_bytes,
    timedelta: _encode_duration,
    BaseException: _encode_exception,
    dict: _encode_mapping,
    Mapping: _encode_mapping,
    list: _encode_sequence,
    tuple: _encode_sequence,
    set: _encode_sequence,
    frozenset: _encode_sequence,
}


def encode_value(value: Any) -> Any:
    """Project ``value`` into data orjson renders the way torolog documents."""
    if value is None or isinstance(value, float):
        return value
    if isinstance(value, str):
        return clean_text(value)
    if is_object_marshaler(value):
        return _encode_mapping(value.marshal_log_object())
    if is_array_marshaler(value):
        return _encode_sequence(value.marshal_log_array())
    for klass in type(value).__mro__:
        encoder = _ENCODERS.get(klass)
        if encoder is not None:
            return encoder(value)
    if isinstance(value, Mapping):
        return _encode_mapping(value)
    return value


def encode_fields(fields: FieldsLike) -> list[dict[str, Any]]:
    """Render fields as an ordered array of single-key objects."""
    return _encode_sequence(as_fields(fields).marshal_log_array())
