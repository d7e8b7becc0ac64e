"""Marker and serialization for values stored as Firestore document references."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any

from firestore_kit.errors import FirestoreSerializeError
from firestore_kit.value import FirestoreValue, ValueType

_UNSUPPORTED = "Reference serializer doesn't support this type"


@dataclass(frozen=True)
class FirestoreReference:
    """A document path stored as a Firestore reference value."""

    value: str = ""


def serialize_reference_for_firestore(value: Any, none_as_null: bool) -> FirestoreValue:
    """Serialize a string, an enum member or None as a Firestore reference.

    A FirestoreReference marker is unwrapped. An enum member is stored by its
    name. None becomes an explicit null when ``none_as_null`` is set and an
    unset value otherwise. Anything else raises FirestoreSerializeError.
    """
    if isinstance(value, FirestoreReference):
        return serialize_reference_for_firestore(value.value, none_as_null)
    if value is None:
        if none_as_null:
            return FirestoreValue(ValueType.NULL, None)
        return FirestoreValue()
    if isinstance(value, enum.Enum):
        return FirestoreValue(ValueType.REFERENCE, value.name)
    if isinstance(value, str):
        return FirestoreValue(ValueType.REFERENCE, str(value))
    raise FirestoreSerializeError(_UNSUPPORTED)