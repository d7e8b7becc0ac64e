from dataclasses import dataclass

import pytest

from firestore_kit.errors import FirestoreSerializeError
from firestore_kit.latlng import (
    FirestoreGeoPoint,
    FirestoreLatLng,
    serialize_latlng_for_firestore,
)
from firestore_kit.value import FirestoreValue, LatLng, ValueType


@dataclass
class IntegerPoint:
    latitude: int
    longitude: int


@dataclass
class PointWithExtras:
    latitude: float
    longitude: float
    label: str


@dataclass
class MissingLongitude:
    latitude: float


def test_geo_point_serializes_to_geo_point_value():
    result = serialize_latlng_for_firestore(FirestoreGeoPoint(1.5, -2.25))
    assert result == FirestoreValue(ValueType.GEO_POINT, LatLng(1.5, -2.25))


def test_marker_is_unwrapped():
    point = FirestoreGeoPoint(51.5, -0.125)
    result = serialize_latlng_for_firestore(FirestoreLatLng(point))
    assert result.value_type is ValueType.GEO_POINT
    assert result.value == LatLng(point.latitude, point.longitude)


def test_default_marker_is_origin():
    result = serialize_latlng_for_firestore(FirestoreLatLng())
    assert result.value == LatLng(0.0, 0.0)


def test_value_module_latlng_is_accepted():
    result = serialize_latlng_for_firestore(LatLng(10.0, 20.0))
    assert result.value == LatLng(10.0, 20.0)


def test_extra_fields_are_ignored():
    result = serialize_latlng_for_firestore(PointWithExtras(3.0, 4.0, "home"))
    assert result.value == LatLng(3.0, 4.0)


def test_none_is_unset():
    assert serialize_latlng_for_firestore(None).is_empty()


@pytest.mark.parametrize("bad", [IntegerPoint(1, 2), MissingLongitude(1.0)])
def test_unrecognized_structure_raises(bad):
    with pytest.raises(FirestoreSerializeError) as info:
        serialize_latlng_for_firestore(bad)
    assert info.value.public.code == (
        "LatLng serializer doesn't recognize the structure of the object"
    )


@pytest.mark.parametrize(
    "bad",
    [1.0, 3, True, "51.5,-0.1", [1.0, 2.0], (1.0, 2.0), {"latitude": 1.0, "longitude": 2.0}],
)
def test_unsupported_types_raise(bad):
    with pytest.raises(FirestoreSerializeError) as info:
        serialize_latlng_for_firestore(bad)
    assert info.value.public.code == "LatLng serializer doesn't support this type"


def test_dataclass_class_itself_is_unsupported():
    with pytest.raises(FirestoreSerializeError):
        serialize_latlng_for_firestore(FirestoreGeoPoint)


def test_geo_points_order_by_latitude_then_longitude():
    points = [
        FirestoreGeoPoint(2.0, 0.0),
        FirestoreGeoPoint(1.0, 5.0),
        FirestoreGeoPoint(1.0, -5.0),
    ]
    assert sorted(points) == [points[2], points[1], points[0]]
    assert FirestoreGeoPoint() == FirestoreGeoPoint(0.0, 0.0)