"""Error types raised by the client, and helpers that classify them."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import timedelta


class StatusCode(enum.IntEnum):
    """gRPC status codes returned by the Firestore service."""

    OK = 0
    CANCELLED = 1
    UNKNOWN = 2
    INVALID_ARGUMENT = 3
    DEADLINE_EXCEEDED = 4
    NOT_FOUND = 5
    ALREADY_EXISTS = 6
    PERMISSION_DENIED = 7
    RESOURCE_EXHAUSTED = 8
    FAILED_PRECONDITION = 9
    ABORTED = 10
    OUT_OF_RANGE = 11
    UNIMPLEMENTED = 12
    INTERNAL = 13
    UNAVAILABLE = 14
    DATA_LOSS = 15
    UNAUTHENTICATED = 16


_RETRYABLE_CODES = frozenset(
    {
        StatusCode.ABORTED,
        StatusCode.CANCELLED,
        StatusCode.UNAVAILABLE,
        StatusCode.RESOURCE_EXHAUSTED,
    }
)


def _code_label(code: StatusCode) -> str:
    return "".join(part.capitalize() for part in code.name.split("_"))


@dataclass(frozen=True)
class ErrorPublicGenericDetails:
    """Public, machine-readable part of an error."""

    code: str


@dataclass(frozen=True)
class InvalidParametersPublicDetails:
    """Public details of an invalid-parameter error."""

    field: str
    error: str


class FirestoreError(Exception):
    """Base class of every error raised by this package."""


class FirestoreSystemError(FirestoreError):
    """Internal or system failure."""

    def __init__(self, public: ErrorPublicGenericDetails, message: str) -> None:
        self.public = public
        self.message = message
        super().__init__(f"Firestore system/internal error: {message}")


class FirestoreDatabaseError(FirestoreError):
    """General database failure, possibly retryable."""

    def __init__(
        self, public: ErrorPublicGenericDetails, details: str, retry_possible: bool
    ) -> None:
        self.public = public
        self.details = details
        self.retry_possible = retry_possible
        super().__init__(f"Database general error occurred: {details}")


class FirestoreDataConflictError(FirestoreError):
    """The data already exists or conflicts with existing data."""

    def __init__(self, public: ErrorPublicGenericDetails, details: str) -> None:
        self.public = public
        self.details = details
        super().__init__(f"Database conflict error occurred: {details}")


class FirestoreDataNotFoundError(FirestoreError):
    """The requested data does not exist."""

    def __init__(
        self, public: ErrorPublicGenericDetails, data_detail_message: str
    ) -> None:
        self.public = public
        self.data_detail_message = data_detail_message
        super().__init__(f"Data not found error occurred: {public!r}")


class FirestoreInvalidParametersError(FirestoreError):
    """A parameter given to the client is not acceptable."""

    def __init__(self, public: InvalidParametersPublicDetails) -> None:
        self.public = public
        super().__init__(f"Data not found error occurred: {public!r}")


class _SerializationError(FirestoreError):
    def __init__(self, message: str) -> None:
        self.public = ErrorPublicGenericDetails(message)
        super().__init__(f"Invalid serialization: {self.public!r}")


class FirestoreSerializeError(_SerializationError):
    """A value could not be converted into a Firestore value."""


class FirestoreDeserializeError(_SerializationError):
    """A Firestore value could not be converted into a Python value."""


class FirestoreNetworkError(FirestoreError):
    """Transport-level failure."""

    def __init__(self, public: ErrorPublicGenericDetails, message: str) -> None:
        self.public = public
        self.message = message
        super().__init__(f"Network error: {message}")


class FirestoreErrorInTransaction(FirestoreError):
    """An error raised by user code running inside a transaction."""

    def __init__(self, transaction_id: bytes, source: BaseException) -> None:
        self.transaction_id = bytes(transaction_id)
        self.source = source
        super().__init__(
            "Error occurred inside run transaction scope "
            f"{self.transaction_id.hex()}: {source}"
        )
        self.__cause__ = source


class BackoffError(Exception):
    """Wraps an error with a decision on whether the operation may be retried."""

    def __init__(
        self,
        err: BaseException,
        transient: bool = False,
        retry_after: timedelta | None = None,
    ) -> None:
        self.err = err
        self.transient = transient
        self.retry_after = retry_after
        super().__init__(str(err))
        self.__cause__ = err


def _status_text(code: StatusCode, message: str) -> str:
    return f'status: {_code_label(code)}, message: "{message}"'


def error_from_status(
    code: StatusCode | int, message: str, source: BaseException | None = None
) -> FirestoreError:
    """Classify a gRPC status into the matching error."""
    code = StatusCode(code)
    label = _code_label(code)
    status = _status_text(code, message)

    if code == StatusCode.ALREADY_EXISTS:
        return FirestoreDataConflictError(ErrorPublicGenericDetails(label), status)
    if code == StatusCode.NOT_FOUND:
        return FirestoreDataNotFoundError(ErrorPublicGenericDetails(label), status)
    if code in _RETRYABLE_CODES:
        return FirestoreDatabaseError(ErrorPublicGenericDetails(label), status, True)
    if code == StatusCode.UNKNOWN and isinstance(source, OSError):
        if isinstance(source, ConnectionError):
            return FirestoreDatabaseError(
                ErrorPublicGenericDetails("CONNECTION_CLOSED"),
                f"Hyper error: {source}",
                True,
            )
        if isinstance(source, TimeoutError):
            return FirestoreDatabaseError(
                ErrorPublicGenericDetails("CONNECTION_TIMEOUT"),
                f"Hyper error: {source}",
                True,
            )
        return FirestoreDatabaseError(
            ErrorPublicGenericDetails(label), f"Hyper error: {source}", False
        )
    return FirestoreDatabaseError(ErrorPublicGenericDetails(label), status, False)


def error_from_parse(message: str) -> FirestoreDeserializeError:
    """Error for a value that could not be parsed."""
    return FirestoreDeserializeError(f"Parse error: {message}")


def error_from_out_of_range(message: str) -> FirestoreInvalidParametersError:
    """Error for a duration that is out of range."""
    return FirestoreInvalidParametersError(
        InvalidParametersPublicDetails(f"Out of range: {message}", "duration")
    )


def permanent_in_transaction(
    transaction_id: bytes, source: BaseException
) -> BackoffError:
    """Fail the transaction without retrying."""
    return BackoffError(FirestoreErrorInTransaction(transaction_id, source))


def transient_in_transaction(
    transaction_id: bytes, source: BaseException
) -> BackoffError:
    """Fail the transaction attempt and allow a retry."""
    return BackoffError(
        FirestoreErrorInTransaction(transaction_id, source), transient=True
    )


def retry_after_in_transaction(
    transaction_id: bytes, source: BaseException, retry_after: timedelta
) -> BackoffError:
    """Fail the transaction attempt and retry after the given delay."""
    millis = max(0, int(retry_after / timedelta(milliseconds=1)))
    return BackoffError(
        FirestoreErrorInTransaction(transaction_id, source),
        transient=True,
        retry_after=timedelta(milliseconds=millis),
    )


def to_backoff_error(err: FirestoreError) -> BackoffError:
    """Retryable database errors become transient, all others permanent."""
    if isinstance(err, FirestoreDatabaseError) and err.retry_possible:
        return BackoffError(err, transient=True)
    return BackoffError(err)