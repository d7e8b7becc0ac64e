# firestore_kit

Building blocks for working with Firestore documents from Python: a typed
value model, serialization of plain Python objects into Firestore values and
documents, query and filter models, write preconditions, field transforms,
transaction options and a structured error hierarchy.

The package has no dependencies outside the standard library.

## Installation

```
pip install firestore_kit
```

For running the test suite:

```
pip install "firestore_kit[test]"
pytest
```

## Values and documents

`firestore_kit.value` defines:

- `FirestoreValue`: a `value_type` (a `ValueType` member, or `None` for an
  unset value) and a Python payload. `is_empty()` is true for an unset value.
- `ValueType`: `NULL`, `BOOLEAN`, `INTEGER`, `DOUBLE`, `TIMESTAMP`, `STRING`,
  `BYTES`, `REFERENCE`, `GEO_POINT`, `ARRAY`, `MAP`.
- `Timestamp` (seconds and nanos since the Unix epoch), `LatLng` and
  `Document` (name, fields, create and update times).
- `to_timestamp(dt)` and `from_timestamp(ts)`. Naive datetimes are taken as
  UTC; `from_timestamp` returns an aware UTC datetime and raises
  `FirestoreDeserializeError` for invalid nanos or out-of-range values.

## Serializing Python objects

`firestore_kit.serializer` turns Python objects into Firestore values:

- `FirestoreValueSerializer(none_as_null=False).serialize(obj)` handles
  `bool`, `int` (64-bit range; unsigned 64-bit values wrap), `float`, `str`,
  `bytes`, enum members (stored by name), `datetime` (stored as an RFC 3339
  string), dataclasses, mappings (string or integer keys) and lists, tuples
  and sets. `None` becomes an unset value, which is left out of arrays and
  maps, or an explicit null when `none_as_null` is set. Other types raise
  `FirestoreSerializeError`.
- `to_firestore_value(obj)` does the same but returns an unset value instead
  of raising.
- `firestore_document_from_serializable(document_path, obj)` builds a
  `Document` from an object that serializes to a map, and raises
  `FirestoreSystemError` otherwise.

```python
from firestore_kit.serializer import firestore_document_from_serializable
from firestore_kit.timestamps import FirestoreTimestamp
from datetime import datetime, timezone

doc = firestore_document_from_serializable(
    "projects/demo/databases/(default)/documents/users/u1",
    {
        "name": "Ada",
        "age": 36,
        "joined": FirestoreTimestamp(datetime(2020, 1, 1, tzinfo=timezone.utc)),
    },
)
```

Wrappers choose how a field is stored:

- `FirestoreTimestamp` (`firestore_kit.timestamps`): a datetime or RFC 3339
  string stored as a timestamp value.
- `FirestoreTimestampAsNull`: as above, but `None` is stored as an explicit
  null.
- `FirestoreNull`: any value, with `None` inside it stored as an explicit
  null.
- `FirestoreReference` (`firestore_kit.references`): a document path stored
  as a reference value.
- `FirestoreLatLng` wrapping a `FirestoreGeoPoint` (`firestore_kit.latlng`):
  stored as a geo point. Both coordinates must be floats.

The functions behind them, `serialize_timestamp_for_firestore`,
`serialize_reference_for_firestore` and `serialize_latlng_for_firestore`, can
also be called directly.

## Queries

`firestore_kit.query_models` provides `FirestoreQueryParams` (collection as a
plain string, `SingleCollection` or `CollectionGroup`; parent, limit, offset,
ordering, filter, descendants, projected fields and cursors).
`to_structured_query()` returns the structured query as a dict.

- Ordering: `FirestoreQueryOrder` with `FirestoreQueryDirection`
  (`to_string_format()` gives e.g. `"name asc"`).
- Filters: `FirestoreQueryFilterCompare` (`CompareOperator`),
  `FirestoreQueryFilterUnary` (`UnaryOperator`) and
  `FirestoreQueryFilterComposite` (`CompositeOperator`); `filter_to_proto`
  gives their wire form, dropping empty (`None`) entries from composites.
- Cursors: `FirestoreQueryCursor` with `to_proto()` and `cursor_from_proto`.
- Partitions: `FirestorePartitionQueryParams` (with `with_page_token`) and
  `FirestorePartition`.

## Writes and transactions

- `ExistsPrecondition`, `UpdateTimePrecondition`
  (`firestore_kit.preconditions`).
- `FirestoreFieldTransform` with `SetToServerValue` (`ServerValue`),
  `Increment`, `Maximum`, `Minimum`, `AppendMissingElements`,
  `RemoveAllFromArray`; `FirestoreWriteResult` and `write_result_from_proto`
  (`firestore_kit.transforms`).
- `FirestoreTransactionOptions` with `ReadOnlyMode`, `ReadWriteMode`,
  `ReadWriteRetryMode`, and `FirestoreTransactionResponse`
  (`firestore_kit.transaction_models`).

Each model's `to_proto()` returns its wire form as a plain dict.

## Errors

Every error derives from `FirestoreError` (`firestore_kit.errors`):
`FirestoreSystemError`, `FirestoreDatabaseError` (with `retry_possible`),
`FirestoreDataConflictError`, `FirestoreDataNotFoundError`,
`FirestoreInvalidParametersError`, `FirestoreSerializeError`,
`FirestoreDeserializeError`, `FirestoreNetworkError` and
`FirestoreErrorInTransaction`.

- `error_from_status(code, message, source)` maps a `StatusCode` to the
  matching error; `ABORTED`, `CANCELLED`, `UNAVAILABLE` and
  `RESOURCE_EXHAUSTED` are retryable, and an `UNKNOWN` status caused by a
  connection or timeout error is retryable too.
- `error_from_parse` and `error_from_out_of_range` build the errors for bad
  input.
- `BackoffError` marks an error as transient (optionally with `retry_after`)
  or permanent. `to_backoff_error` makes retryable database errors transient;
  `permanent_in_transaction`, `transient_in_transaction` and
  `retry_after_in_transaction` wrap user errors raised inside a transaction.

## What this package does not do

- It does not talk to Firestore: there is no client, no connection, no
  query execution and no transaction runner. It only builds and reads the
  data structures that such a client would send and receive.
- It does not convert Firestore values or documents back into Python
  objects; only the direction from Python objects to Firestore values is
  provided.