from datetime import datetime, timedelta, timezone

import pytest

from firestore_kit.errors import FirestoreDeserializeError, FirestoreSerializeError
from firestore_kit.timestamps import (
    FirestoreNull,
    FirestoreTimestamp,
    FirestoreTimestampAsNull,
    serialize_timestamp_for_firestore,
)
from firestore_kit.value import Timestamp, ValueType, from_timestamp, to_timestamp


def test_epoch_datetime_is_zero_timestamp():
    epoch = datetime(1970, 1, 1, tzinfo=timezone.utc)
    result = serialize_timestamp_for_firestore(epoch, False)
    assert result.value_type == ValueType.TIMESTAMP
    assert result.value == Timestamp(0, 0)


def test_datetime_round_trips():
    dt = datetime(2022, 7, 14, 9, 30, 15, 250000, tzinfo=timezone.utc)
    result = serialize_timestamp_for_firestore(dt, False)
    assert from_timestamp(result.value) == dt


def test_epoch_string_is_zero_timestamp():
    result = serialize_timestamp_for_firestore("1970-01-01T00:00:00Z", False)
    assert result.value == Timestamp(0, 0)


def test_string_matches_datetime():
    dt = datetime(2021, 3, 4, 5, 6, 7, tzinfo=timezone.utc)
    from_string = serialize_timestamp_for_firestore("2021-03-04T05:06:07Z", False)
    assert from_string.value == to_timestamp(dt)


def test_string_keeps_nanoseconds():
    result = serialize_timestamp_for_firestore("2021-03-04T05:06:07.123456789Z", False)
    base = to_timestamp(datetime(2021, 3, 4, 5, 6, 7, tzinfo=timezone.utc))
    assert result.value == Timestamp(base.seconds, 123456789)


def test_offset_string_equals_utc_string():
    utc = serialize_timestamp_for_firestore("2021-03-04T05:06:07Z", False)
    shifted = serialize_timestamp_for_firestore("2021-03-04T07:06:07+02:00", False)
    assert utc.value == shifted.value


def test_aware_non_utc_datetime_equals_utc():
    local = datetime(2021, 3, 4, 7, 6, 7, tzinfo=timezone(timedelta(hours=2)))
    utc = datetime(2021, 3, 4, 5, 6, 7, tzinfo=timezone.utc)
    assert (
        serialize_timestamp_for_firestore(local, False).value
        == serialize_timestamp_for_firestore(utc, False).value
    )


def test_none_without_null_is_empty():
    result = serialize_timestamp_for_firestore(None, False)
    assert result.is_empty()


def test_none_with_null_is_null():
    result = serialize_timestamp_for_firestore(None, True)
    assert result.value_type == ValueType.NULL
    assert result.value is None


@pytest.mark.parametrize(
    "wrapper",
    [FirestoreTimestamp, FirestoreTimestampAsNull, FirestoreNull],
)
def test_wrappers_are_unwrapped(wrapper):
    dt = datetime(2020, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    assert (
        serialize_timestamp_for_firestore(wrapper(dt), False).value
        == to_timestamp(dt)
    )


def test_absent_as_null_wrapper_gives_null():
    result = serialize_timestamp_for_firestore(FirestoreTimestampAsNull(None), True)
    assert result.value_type == ValueType.NULL


@pytest.mark.parametrize("value", [True, 5, 1.5, b"abc", [1], {"a": 1}, ("x",)])
def test_unsupported_types_raise(value):
    with pytest.raises(FirestoreSerializeError) as info:
        serialize_timestamp_for_firestore(value, False)
    assert info.value.public.code == "Timestamp serializer doesn't support this type"


@pytest.mark.parametrize("text", ["not a date", "2021-03-04", "2021-13-40T00:00:00Z"])
def test_invalid_strings_raise_parse_error(text):
    with pytest.raises(FirestoreDeserializeError) as info:
        serialize_timestamp_for_firestore(text, False)
    assert info.value.public.code.startswith("Parse error: ")


def test_timestamp_wrapper_ordering_follows_datetime():
    earlier = FirestoreTimestamp(datetime(2020, 1, 1, tzinfo=timezone.utc))
    later = FirestoreTimestamp(datetime(2021, 1, 1, tzinfo=timezone.utc))
    assert earlier < later
    assert sorted([later, earlier]) == [earlier, later]


def test_timestamp_wrapper_default_is_epoch():
    result = serialize_timestamp_for_firestore(FirestoreTimestamp(), False)
    assert result.value == Timestamp(0, 0)