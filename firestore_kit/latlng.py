"""Geographic point types and their serialization as Firestore geo points."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any

from firestore_kit.errors import FirestoreSerializeError
from firestore_kit.value import FirestoreValue, LatLng, ValueType

_UNSUPPORTED = "LatLng serializer doesn't support this type"
_UNRECOGNIZED = "LatLng serializer doesn't recognize the structure of the object"


@dataclass(order=True)
class FirestoreGeoPoint:
    """Latitude and longitude in degrees."""

    latitude: float = 0.0
    longitude: float = 0.0


@dataclass(order=True)
class FirestoreLatLng:
    """A geo point stored as a Firestore geo point value."""

    point: FirestoreGeoPoint = field(default_factory=FirestoreGeoPoint)


def _as_double(value: Any) -> float | None:
    if isinstance(value, float):
        return float(value)
    return None


def serialize_latlng_for_firestore(value: Any) -> FirestoreValue:
    """Serialize an object with float ``latitude`` and ``longitude`` fields.

    A FirestoreLatLng marker is unwrapped and None becomes an unset value.
    Dataclass instances are read field by field; both coordinates must be
    floats. Any other type raises FirestoreSerializeError.
    """
    if isinstance(value, FirestoreLatLng):
        return serialize_latlng_for_firestore(value.point)
    if value is None:
        return FirestoreValue()
    if not (dataclasses.is_dataclass(value) and not isinstance(value, type)):
        raise FirestoreSerializeError(_UNSUPPORTED)

    fields = {f.name: getattr(value, f.name) for f in dataclasses.fields(value)}
    lat = _as_double(fields.get("latitude"))
    lng = _as_double(fields.get("longitude"))
    if lat is None or lng is None:
        raise FirestoreSerializeError(_UNRECOGNIZED)
    return FirestoreValue(ValueType.GEO_POINT, LatLng(lat, lng))