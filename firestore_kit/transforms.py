"""Server-side field transforms and write results."""

from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Union

from firestore_kit.value import FirestoreValue, from_timestamp


class ServerValue(enum.IntEnum):
    """Values computed by the server."""

    UNSPECIFIED = 0
    REQUEST_TIME = 1


@dataclass(frozen=True)
class SetToServerValue:
    """Set the field to a server-computed value."""

    value: ServerValue

    def to_proto(self) -> dict:
        return {"set_to_server_value": int(self.value)}


@dataclass
class Increment:
    """Add the given number to the field."""

    value: FirestoreValue

    def to_proto(self) -> dict:
        return {"increment": self.value}


@dataclass
class Maximum:
    """Set the field to the larger of its value and the given one."""

    value: FirestoreValue

    def to_proto(self) -> dict:
        return {"maximum": self.value}


@dataclass
class Minimum:
    """Set the field to the smaller of its value and the given one."""

    value: FirestoreValue

    def to_proto(self) -> dict:
        return {"minimum": self.value}


@dataclass
class AppendMissingElements:
    """Append elements not already present in the array field."""

    values: list[FirestoreValue]

    def to_proto(self) -> dict:
        return {"append_missing_elements": {"values": list(self.values)}}


@dataclass
class RemoveAllFromArray:
    """Remove every occurrence of the given elements from the array field."""

    values: list[FirestoreValue]

    def to_proto(self) -> dict:
        return {"remove_all_from_array": {"values": list(self.values)}}


TransformType = Union[
    SetToServerValue,
    Increment,
    Maximum,
    Minimum,
    AppendMissingElements,
    RemoveAllFromArray,
]


@dataclass
class FirestoreFieldTransform:
    """A transform applied to one field of a document."""

    field: str
    transform_type: TransformType

    def to_proto(self) -> dict:
        return {"field_path": self.field, **self.transform_type.to_proto()}


@dataclass
class FirestoreWriteResult:
    """Result of one write: its update time and transform results."""

    update_time: datetime | None = None
    transform_results: list[FirestoreValue] = field(default_factory=list)


def write_result_from_proto(proto: Mapping) -> FirestoreWriteResult:
    """Build a write result from a mapping with update_time and transform_results."""
    update_time = proto.get("update_time")
    return FirestoreWriteResult(
        update_time=None if update_time is None else from_timestamp(update_time),
        transform_results=list(proto.get("transform_results", ())),
    )