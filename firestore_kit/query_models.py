"""Query parameters, filters, ordering and cursors, with their wire forms."""

from __future__ import annotations

import dataclasses
import enum
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Union

from firestore_kit.value import FirestoreValue


@dataclass(frozen=True)
class SingleCollection:
    """Query a single collection by its id."""

    collection_id: str

    def __str__(self) -> str:
        return self.collection_id


@dataclass(frozen=True)
class CollectionGroup:
    """Query several collections by their ids."""

    collection_ids: list[str] = field(default_factory=list)

    def __str__(self) -> str:
        return ",".join(self.collection_ids)


QueryCollection = Union[SingleCollection, CollectionGroup]


class FirestoreQueryDirection(enum.Enum):
    """Sort direction of a query order."""

    ASCENDING = "asc"
    DESCENDING = "desc"

    def __str__(self) -> str:
        return self.value


_DIRECTION_PROTO = {
    FirestoreQueryDirection.ASCENDING: 1,
    FirestoreQueryDirection.DESCENDING: 2,
}


class CompositeOperator(enum.IntEnum):
    """Operator joining the filters of a composite filter."""

    AND = 1
    OR = 2


class UnaryOperator(enum.IntEnum):
    """Operator of a unary field filter."""

    IS_NAN = 2
    IS_NULL = 3
    IS_NOT_NAN = 4
    IS_NOT_NULL = 5


class CompareOperator(enum.IntEnum):
    """Operator comparing a field with a value."""

    LESS_THAN = 1
    LESS_THAN_OR_EQUAL = 2
    GREATER_THAN = 3
    GREATER_THAN_OR_EQUAL = 4
    EQUAL = 5
    NOT_EQUAL = 6
    ARRAY_CONTAINS = 7
    IN = 8
    ARRAY_CONTAINS_ANY = 9
    NOT_IN = 10


def _field_ref(field_name: str) -> dict:
    return {"field_path": field_name}


@dataclass(frozen=True)
class FirestoreQueryOrder:
    """Order results by one field."""

    field_name: str
    direction: FirestoreQueryDirection = FirestoreQueryDirection.ASCENDING

    def to_string_format(self) -> str:
        return f"{self.field_name} {self.direction}"

    def to_proto(self) -> dict:
        return {
            "field": _field_ref(self.field_name),
            "direction": _DIRECTION_PROTO[self.direction],
        }


@dataclass(frozen=True)
class FirestoreQueryFilterUnary:
    """A test on one field that takes no value, such as IS_NULL."""

    operator: UnaryOperator
    field_name: str


@dataclass(frozen=True)
class FirestoreQueryFilterCompare:
    """A comparison of one field with a value."""

    operator: CompareOperator
    field_name: str
    value: FirestoreValue


@dataclass(frozen=True)
class FirestoreQueryFilterComposite:
    """Several filters joined by AND or OR.

    A ``None`` entry stands for an empty comparison and is left out of the
    wire form.
    """

    for_all_filters: list[QueryFilter | None]
    operator: CompositeOperator = CompositeOperator.AND


QueryFilter = Union[
    FirestoreQueryFilterComposite,
    FirestoreQueryFilterUnary,
    FirestoreQueryFilterCompare,
]


def filter_to_proto(query_filter: QueryFilter | None) -> dict:
    """Wire form of a filter; an empty mapping for an empty comparison."""
    if query_filter is None:
        return {}
    if isinstance(query_filter, FirestoreQueryFilterCompare):
        return {
            "field_filter": {
                "field": _field_ref(query_filter.field_name),
                "op": int(query_filter.operator),
                "value": query_filter.value,
            }
        }
    if isinstance(query_filter, FirestoreQueryFilterUnary):
        return {
            "unary_filter": {
                "op": int(query_filter.operator),
                "field": _field_ref(query_filter.field_name),
            }
        }
    if isinstance(query_filter, FirestoreQueryFilterComposite):
        filters = [
            proto
            for proto in map(filter_to_proto, query_filter.for_all_filters)
            if proto
        ]
        return {
            "composite_filter": {
                "op": int(query_filter.operator),
                "filters": filters,
            }
        }
    raise TypeError(f"Unsupported query filter: {query_filter!r}")


@dataclass(frozen=True)
class FirestoreQueryCursor:
    """A position in query results: before or after the given values."""

    values: list[FirestoreValue] = field(default_factory=list)
    before: bool = True

    def to_proto(self) -> dict:
        return {"values": list(self.values), "before": self.before}


def cursor_from_proto(proto: Mapping) -> FirestoreQueryCursor:
    """Build a cursor from a mapping with ``values`` and ``before``."""
    return FirestoreQueryCursor(
        values=list(proto.get("values", ())),
        before=bool(proto.get("before", False)),
    )


@dataclass(frozen=True)
class FirestoreQueryParams:
    """Parameters of a structured query.

    A plain string given as ``collection_id`` names a single collection.
    """

    collection_id: QueryCollection | str
    parent: str | None = None
    limit: int | None = None
    offset: int | None = None
    order_by: list[FirestoreQueryOrder] | None = None
    filter: QueryFilter | None = None
    all_descendants: bool | None = None
    return_only_fields: list[str] | None = None
    start_at: FirestoreQueryCursor | None = None
    end_at: FirestoreQueryCursor | None = None

    def __post_init__(self) -> None:
        if isinstance(self.collection_id, str):
            object.__setattr__(
                self, "collection_id", SingleCollection(self.collection_id)
            )

    def to_structured_query(self) -> dict:
        """Wire form of the structured query these parameters describe."""
        all_descendants = bool(self.all_descendants)
        if isinstance(self.collection_id, CollectionGroup):
            collection_ids = list(self.collection_id.collection_ids)
        else:
            collection_ids = [self.collection_id.collection_id]
        return {
            "select": None
            if self.return_only_fields is None
            else {"fields": [_field_ref(name) for name in self.return_only_fields]},
            "start_at": None if self.start_at is None else self.start_at.to_proto(),
            "end_at": None if self.end_at is None else self.end_at.to_proto(),
            "limit": self.limit,
            "offset": self.offset or 0,
            "order_by": [order.to_proto() for order in self.order_by or ()],
            "from": [
                {"collection_id": cid, "all_descendants": all_descendants}
                for cid in collection_ids
            ],
            "where": None if self.filter is None else filter_to_proto(self.filter),
        }


@dataclass(frozen=True)
class FirestorePartitionQueryParams:
    """Parameters for splitting a query into partitions."""

    query_params: FirestoreQueryParams
    partition_count: int
    page_size: int
    page_token: str | None = None

    def with_page_token(self, page_token: str) -> FirestorePartitionQueryParams:
        """A copy of these parameters that continues from ``page_token``."""
        return dataclasses.replace(self, page_token=page_token)


@dataclass(frozen=True)
class FirestorePartition:
    """Bounds of one query partition."""

    start_at: FirestoreQueryCursor | None = None
    end_at: FirestoreQueryCursor | None = None