"""Transaction options and responses."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Union

from firestore_kit.transforms import FirestoreWriteResult


@dataclass(frozen=True)
class ReadOnlyMode:
    """Read-only transaction, optionally bound to a consistency selector.

    ``consistency_selector`` is given in its wire form.
    """

    consistency_selector: Mapping[str, Any] | None = None


@dataclass(frozen=True)
class ReadWriteMode:
    """Read-write transaction."""


@dataclass(frozen=True)
class ReadWriteRetryMode:
    """Read-write transaction retrying an earlier one."""

    transaction_id: bytes


TransactionMode = Union[ReadOnlyMode, ReadWriteMode, ReadWriteRetryMode]


@dataclass(frozen=True)
class FirestoreTransactionOptions:
    """How a transaction is started and how long it may be retried."""

    mode: TransactionMode = field(default_factory=ReadWriteMode)
    max_elapsed_time: timedelta | None = None

    def to_proto(self) -> dict:
        """Wire form of the transaction options."""
        mode = self.mode
        if isinstance(mode, ReadOnlyMode):
            selector = mode.consistency_selector
            return {
                "read_only": {
                    "consistency_selector": None if selector is None else dict(selector)
                }
            }
        if isinstance(mode, ReadWriteRetryMode):
            return {"read_write": {"retry_transaction": bytes(mode.transaction_id)}}
        if isinstance(mode, ReadWriteMode):
            return {"read_write": {"retry_transaction": b""}}
        raise TypeError(f"Unsupported transaction mode: {mode!r}")


@dataclass
class FirestoreTransactionResponse:
    """Results of a committed transaction."""

    write_results: list[FirestoreWriteResult] = field(default_factory=list)
    commit_time: datetime | None = None