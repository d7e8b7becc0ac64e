"""Conversion of Python objects into Firestore values and documents."""

from __future__ import annotations

import dataclasses
import enum
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from firestore_kit.errors import (
    ErrorPublicGenericDetails,
    FirestoreError,
    FirestoreSerializeError,
    FirestoreSystemError,
)
from firestore_kit.latlng import FirestoreLatLng, serialize_latlng_for_firestore
from firestore_kit.references import (
    FirestoreReference,
    serialize_reference_for_firestore,
)
from firestore_kit.timestamps import (
    FirestoreNull,
    FirestoreTimestamp,
    FirestoreTimestampAsNull,
    serialize_timestamp_for_firestore,
)
from firestore_kit.value import Document, FirestoreValue, ValueType

_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1
_U64_MAX = 2**64 - 1


def _to_i64(number: int) -> int:
    if _I64_MIN <= number <= _I64_MAX:
        return number
    if _I64_MAX < number <= _U64_MAX:
        return number - 2**64
    raise FirestoreSerializeError(f"Integer out of range: {number}")


def _format_datetime(dt: datetime) -> str:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    text = dt.astimezone(timezone.utc).isoformat()
    if text.endswith("+00:00"):
        text = text[: -len("+00:00")] + "Z"
    return text


class FirestoreValueSerializer:
    """Serializes Python objects into FirestoreValue instances.

    Unset values (such as None when ``none_as_null`` is false) are left out
    of arrays and maps. With ``none_as_null`` set, None becomes an explicit
    null value instead.
    """

    def __init__(self, none_as_null: bool = False) -> None:
        self.none_as_null = none_as_null

    def _child(self, none_as_null: bool | None = None) -> FirestoreValueSerializer:
        if none_as_null is None or none_as_null == self.none_as_null:
            return self
        return FirestoreValueSerializer(none_as_null)

    def serialize(self, obj: Any) -> FirestoreValue:
        """Convert ``obj`` into a FirestoreValue."""
        if isinstance(obj, FirestoreValue):
            return obj
        if isinstance(obj, FirestoreTimestamp):
            return serialize_timestamp_for_firestore(obj.value, False)
        if isinstance(obj, FirestoreTimestampAsNull):
            return serialize_timestamp_for_firestore(obj.value, True)
        if isinstance(obj, FirestoreNull):
            return self._child(True).serialize(obj.value)
        if isinstance(obj, FirestoreLatLng):
            return serialize_latlng_for_firestore(obj)
        if isinstance(obj, FirestoreReference):
            return serialize_reference_for_firestore(obj.value, False)
        if obj is None:
            if self.none_as_null:
                return FirestoreValue(ValueType.NULL, None)
            return FirestoreValue()
        if isinstance(obj, enum.Enum):
            return FirestoreValue(ValueType.STRING, obj.name)
        if isinstance(obj, bool):
            return FirestoreValue(ValueType.BOOLEAN, obj)
        if isinstance(obj, int):
            return FirestoreValue(ValueType.INTEGER, _to_i64(obj))
        if isinstance(obj, float):
            return FirestoreValue(ValueType.DOUBLE, obj)
        if isinstance(obj, str):
            return FirestoreValue(ValueType.STRING, obj)
        if isinstance(obj, (bytes, bytearray, memoryview)):
            return FirestoreValue(ValueType.BYTES, bytes(obj))
        if isinstance(obj, datetime):
            return FirestoreValue(ValueType.STRING, _format_datetime(obj))
        if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
            return self._serialize_fields(
                (f.name, getattr(obj, f.name)) for f in dataclasses.fields(obj)
            )
        if isinstance(obj, Mapping):
            return self._serialize_mapping(obj)
        if isinstance(obj, (list, tuple, set, frozenset)):
            return self._serialize_sequence(obj)
        raise FirestoreSerializeError(
            f"Unsupported type for serialization: {type(obj).__name__}"
        )

    def _serialize_sequence(self, items: Any) -> FirestoreValue:
        values = [
            serialized
            for serialized in (self.serialize(item) for item in items)
            if not serialized.is_empty()
        ]
        return FirestoreValue(ValueType.ARRAY, values)

    def _serialize_fields(self, pairs: Any) -> FirestoreValue:
        fields: dict[str, FirestoreValue] = {}
        for name, item in pairs:
            serialized = self.serialize(item)
            if not serialized.is_empty():
                fields[name] = serialized
        return FirestoreValue(ValueType.MAP, fields)

    def _map_key(self, key: Any) -> str:
        serialized = self.serialize(key)
        if serialized.value_type is ValueType.STRING:
            return serialized.value
        if serialized.value_type is ValueType.INTEGER:
            return str(serialized.value)
        raise FirestoreSerializeError("Map key should be a string format")

    def _serialize_mapping(self, mapping: Mapping) -> FirestoreValue:
        return self._serialize_fields(
            (self._map_key(key), item) for key, item in mapping.items()
        )


def to_firestore_value(obj: Any) -> FirestoreValue:
    """Convert ``obj`` into a FirestoreValue; an unset value if it cannot be converted."""
    try:
        return FirestoreValueSerializer().serialize(obj)
    except FirestoreError:
        return FirestoreValue()


def firestore_document_from_serializable(document_path: str, obj: Any) -> Document:
    """Build a document named ``document_path`` from an object that serializes to a map."""
    document_value = FirestoreValueSerializer(none_as_null=False).serialize(obj)
    if document_value.value_type is ValueType.MAP:
        return Document(name=document_path, fields=dict(document_value.value))
    raise FirestoreSystemError(
        ErrorPublicGenericDetails("SystemError"),
        "Unable to create document from value. No object found",
    )