"""
Data-access boundary.

Services never touch the ORM session directly: they receive a ``DataStore``
and speak to it in terms of table names, column dicts and filter predicates.
This keeps the business rules independent of the backing store, and lets
tests swap in a store double (e.g. one that fails every call).

Every method raises ``DataStoreError`` (or ``UniqueViolation``) on failure.
"""
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Protocol, Sequence

from garment_erp.core.exceptions import DataStoreError, UniqueViolation  # noqa: F401 (re-exported)

Row = Dict[str, Any]

OPERATORS = ("eq", "neq", "gt", "gte", "lt", "lte", "in")


@dataclass(frozen=True)
class Filter:
    column: str
    op: str
    value: Any

    def __post_init__(self):
        if self.op not in OPERATORS:
            raise ValueError(f"Unsupported filter operator: {self.op}")


def eq(column: str, value: Any) -> Filter:
    return Filter(column, "eq", value)

def neq(column: str, value: Any) -> Filter:
    return Filter(column, "neq", value)

def gt(column: str, value: Any) -> Filter:
    return Filter(column, "gt", value)

def gte(column: str, value: Any) -> Filter:
    return Filter(column, "gte", value)

def lt(column: str, value: Any) -> Filter:
    return Filter(column, "lt", value)

def lte(column: str, value: Any) -> Filter:
    return Filter(column, "lte", value)

def in_(column: str, values: Iterable[Any]) -> Filter:
    return Filter(column, "in", list(values))


class DataStore(Protocol):
    def select(
        self,
        table: str,
        columns: Optional[Sequence[str]] = None,
        filters: Optional[Sequence[Filter]] = None,
        order_by: Optional[Sequence[str]] = None,
        limit: Optional[int] = None,
    ) -> List[Row]:
        """``order_by`` entries are column names, prefixed with '-' for descending."""
        ...

    def insert(self, table: str, rows: Sequence[Row]) -> List[Row]:
        ...

    def update(self, table: str, patch: Row, filters: Sequence[Filter]) -> List[Row]:
        """Returns the rows as they are after the update."""
        ...

    def upsert(self, table: str, rows: Sequence[Row], conflict_keys: Sequence[str]) -> List[Row]:
        ...

    def delete(self, table: str, filters: Sequence[Filter]) -> int:
        ...

    def rpc(self, name: str, args: Dict[str, Any]) -> Any:
        ...
