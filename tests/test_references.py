import enum

import pytest

from firestore_kit.errors import FirestoreSerializeError
from firestore_kit.references import (
    FirestoreReference,
    serialize_reference_for_firestore,
)
from firestore_kit.value import FirestoreValue, ValueType

DOC_PATH = "projects/demo/databases/(default)/documents/users/alice"


class Colour(enum.Enum):
    RED = 1
    GREEN = 2


def test_plain_string_becomes_reference():
    result = serialize_reference_for_firestore(DOC_PATH, False)
    assert result == FirestoreValue(ValueType.REFERENCE, DOC_PATH)


def test_marker_is_unwrapped():
    result = serialize_reference_for_firestore(FirestoreReference(DOC_PATH), False)
    assert result.value_type is ValueType.REFERENCE
    assert result.value == DOC_PATH


def test_default_marker_holds_empty_path():
    result = serialize_reference_for_firestore(FirestoreReference(), False)
    assert result == FirestoreValue(ValueType.REFERENCE, "")


def test_none_without_null_flag_is_unset():
    result = serialize_reference_for_firestore(None, False)
    assert result.is_empty()


def test_none_with_null_flag_is_explicit_null():
    result = serialize_reference_for_firestore(None, True)
    assert result == FirestoreValue(ValueType.NULL, None)


def test_marker_around_none_respects_flag():
    assert serialize_reference_for_firestore(FirestoreReference(None), True).value_type is ValueType.NULL
    assert serialize_reference_for_firestore(FirestoreReference(None), False).is_empty()


def test_enum_member_stored_by_name():
    result = serialize_reference_for_firestore(Colour.GREEN, False)
    assert result == FirestoreValue(ValueType.REFERENCE, "GREEN")


@pytest.mark.parametrize("bad", [True, 7, 2.5, b"bytes", [DOC_PATH], {"a": DOC_PATH}, (1, 2)])
def test_unsupported_types_raise(bad):
    with pytest.raises(FirestoreSerializeError) as info:
        serialize_reference_for_firestore(bad, False)
    assert info.value.public.code == "Reference serializer doesn't support this type"


def test_marker_equality_and_hash():
    assert FirestoreReference(DOC_PATH) == FirestoreReference(DOC_PATH)
    assert len({FirestoreReference(DOC_PATH), FirestoreReference(DOC_PATH)}) == 1