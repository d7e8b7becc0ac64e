"""Markers and serialization for values stored as Firestore timestamps or nulls."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any

from firestore_kit.errors import FirestoreSerializeError, error_from_parse
from firestore_kit.value import FirestoreValue, Timestamp, ValueType, to_timestamp

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_RFC3339 = re.compile(
    r"^(?P<date>\d{4}-\d{2}-\d{2})[Tt ]"
    r"(?P<time>\d{2}:\d{2}:\d{2})"
    r"(?:\.(?P<fraction>\d+))?"
    r"(?P<offset>[Zz]|[+-]\d{2}:\d{2})$"
)

_UNSUPPORTED = "Timestamp serializer doesn't support this type"


@dataclass(frozen=True, order=True)
class FirestoreTimestamp:
    """A datetime stored as a Firestore timestamp value."""

    value: datetime = field(default=_EPOCH)


@dataclass(frozen=True)
class FirestoreTimestampAsNull:
    """An optional datetime stored as a timestamp, or as an explicit null when absent."""

    value: datetime | None = None


@dataclass(frozen=True)
class FirestoreNull:
    """An optional value whose absence is stored as an explicit null."""

    value: Any = None


def _parse_rfc3339(text: str) -> Timestamp:
    match = _RFC3339.match(text)
    if match is None:
        raise error_from_parse(f"input is not a valid RFC 3339 date-time: {text!r}")
    offset = match["offset"]
    if offset in ("Z", "z"):
        offset = "+00:00"
    try:
        base = datetime.fromisoformat(f"{match['date']}T{match['time']}{offset}")
    except ValueError as exc:
        raise error_from_parse(str(exc)) from exc
    fraction = match["fraction"] or ""
    nanos = int(fraction[:9].ljust(9, "0")) if fraction else 0
    delta: timedelta = base - _EPOCH
    return Timestamp(seconds=delta.days * 86_400 + delta.seconds, nanos=nanos)


def _empty_or_null(none_as_null: bool) -> FirestoreValue:
    if none_as_null:
        return FirestoreValue(ValueType.NULL, None)
    return FirestoreValue()


def serialize_timestamp_for_firestore(value: Any, none_as_null: bool) -> FirestoreValue:
    """Serialize a datetime, an RFC 3339 string or None as a Firestore timestamp.

    Wrapper markers are unwrapped. None becomes an explicit null when
    ``none_as_null`` is set and an unset value otherwise. Anything else raises
    FirestoreSerializeError; a string that is not a date-time raises
    FirestoreDeserializeError.
    """
    if isinstance(value, (FirestoreTimestamp, FirestoreTimestampAsNull, FirestoreNull)):
        return serialize_timestamp_for_firestore(value.value, none_as_null)
    if value is None:
        return _empty_or_null(none_as_null)
    if isinstance(value, datetime):
        return FirestoreValue(ValueType.TIMESTAMP, to_timestamp(value))
    if isinstance(value, enum.Enum):
        return FirestoreValue(ValueType.TIMESTAMP, _parse_rfc3339(value.name))
    if isinstance(value, str):
        return FirestoreValue(ValueType.TIMESTAMP, _parse_rfc3339(value))
    raise FirestoreSerializeError(_UNSUPPORTED)