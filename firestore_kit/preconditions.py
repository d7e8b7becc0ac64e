"""Preconditions for conditional writes."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from firestore_kit.value import to_timestamp


@dataclass(frozen=True)
class ExistsPrecondition:
    """The document must exist (True) or must not exist (False)."""

    exists: bool

    def to_proto(self) -> dict:
        return {"exists": self.exists}


@dataclass(frozen=True)
class UpdateTimePrecondition:
    """The document must exist and have been last updated at this time."""

    update_time: datetime

    def to_proto(self) -> dict:
        return {"update_time": to_timestamp(self.update_time)}