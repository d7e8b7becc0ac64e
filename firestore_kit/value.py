"""Firestore value, timestamp and document representations."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any

from firestore_kit.errors import FirestoreDeserializeError

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_NANOS_PER_SECOND = 1_000_000_000


class ValueType(enum.Enum):
    """Kinds of value a Firestore field can hold."""

    NULL = "null_value"
    BOOLEAN = "boolean_value"
    INTEGER = "integer_value"
    DOUBLE = "double_value"
    TIMESTAMP = "timestamp_value"
    STRING = "string_value"
    BYTES = "bytes_value"
    REFERENCE = "reference_value"
    GEO_POINT = "geo_point_value"
    ARRAY = "array_value"
    MAP = "map_value"


@dataclass(frozen=True)
class LatLng:
    """Geographic point."""

    latitude: float
    longitude: float


@dataclass(frozen=True)
class Timestamp:
    """Point in time as seconds and nanoseconds since the Unix epoch."""

    seconds: int
    nanos: int = 0


@dataclass
class FirestoreValue:
    """A single Firestore value.

    ``value`` holds a Python payload matching ``value_type``: ``None`` for
    NULL, ``Timestamp`` for TIMESTAMP, ``LatLng`` for GEO_POINT, a list of
    ``FirestoreValue`` for ARRAY and a dict of them for MAP. A value whose
    ``value_type`` is ``None`` is unset.
    """

    value_type: ValueType | None = None
    value: Any = None

    def is_empty(self) -> bool:
        """True when no value is set."""
        return self.value_type is None


@dataclass
class Document:
    """A stored document: its full path name and fields."""

    name: str
    fields: dict[str, FirestoreValue] = field(default_factory=dict)
    create_time: Timestamp | None = None
    update_time: Timestamp | None = None


def to_timestamp(dt: datetime) -> Timestamp:
    """Convert a datetime to a Timestamp; naive datetimes are taken as UTC."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    delta = dt - _EPOCH
    return Timestamp(
        seconds=delta.days * 86_400 + delta.seconds,
        nanos=delta.microseconds * 1_000,
    )


def from_timestamp(ts: Timestamp) -> datetime:
    """Convert a Timestamp to an aware UTC datetime."""
    if not 0 <= ts.nanos < _NANOS_PER_SECOND:
        raise FirestoreDeserializeError(
            f"Invalid timestamp nanos: {ts.seconds}s {ts.nanos}ns"
        )
    try:
        return _EPOCH + timedelta(seconds=ts.seconds, microseconds=ts.nanos // 1_000)
    except OverflowError as exc:
        raise FirestoreDeserializeError(
            f"Timestamp out of range: {ts.seconds}s {ts.nanos}ns"
        ) from exc