from datetime import datetime, timezone

import pytest

from firestore_kit.preconditions import ExistsPrecondition, UpdateTimePrecondition
from firestore_kit.value import Timestamp, from_timestamp


@pytest.mark.parametrize("flag", [True, False])
def test_exists(flag):
    assert ExistsPrecondition(flag).to_proto() == {"exists": flag}


def test_update_time_round_trip():
    dt = datetime(2022, 7, 1, 8, 15, 0, 250000, tzinfo=timezone.utc)
    proto = UpdateTimePrecondition(dt).to_proto()
    assert list(proto) == ["update_time"]
    assert isinstance(proto["update_time"], Timestamp)
    assert from_timestamp(proto["update_time"]) == dt


def test_equality():
    assert ExistsPrecondition(True) == ExistsPrecondition(True)
    assert ExistsPrecondition(True) != ExistsPrecondition(False)