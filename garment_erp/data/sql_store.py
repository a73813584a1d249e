"""
SQLAlchemy implementation of the DataStore contract.

Works at the Core level against the declarative metadata so that any mapped
table is reachable by name. Each call commits on its own; multi-call sequences
are not transactional.
"""
import logging
from datetime import date, datetime
from typing import Any, Callable, Dict, List, Optional, Sequence

from sqlalchemy import Date, DateTime, Table, and_, delete, insert, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from garment_erp.database import Base
from garment_erp.core.exceptions import DataStoreError, UniqueViolation
from garment_erp.data.store import Filter, Row
from garment_erp.models._ids import new_id

logger = logging.getLogger(__name__)

Procedure = Callable[[Session, Dict[str, Any]], Any]


def _coerce(column, value: Any) -> Any:
    """Accept ISO strings for date/datetime columns (SQLite only takes Python objects)."""
    if value is None or not isinstance(value, str):
        return value
    try:
        if isinstance(column.type, DateTime):
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        if isinstance(column.type, Date):
            return date.fromisoformat(value[:10])
    except ValueError as e:
        raise DataStoreError(f"Invalid date value {value!r} for column '{column.name}'", table=column.table.name) from e
    return value


class SqlAlchemyStore:
    def __init__(self, db: Session, procedures: Optional[Dict[str, Procedure]] = None):
        self.db = db
        if procedures is None:
            from garment_erp.data.procedures import PROCEDURES
            procedures = PROCEDURES
        self.procedures = procedures

    # ------------------------------------------------------------------ helpers

    def _table(self, name: str) -> Table:
        table = Base.metadata.tables.get(name)
        if table is None:
            raise DataStoreError(f"Unknown table '{name}'", table=name)
        return table

    def _column(self, table: Table, name: str):
        if name not in table.c:
            raise DataStoreError(f"Unknown column '{name}' on '{table.name}'", table=table.name)
        return table.c[name]

    def _values(self, table: Table, row: Row) -> Row:
        return {k: _coerce(self._column(table, k), v) for k, v in row.items()}

    def _where(self, table: Table, filters: Optional[Sequence[Filter]]):
        clauses = []
        for f in filters or []:
            col = self._column(table, f.column)
            if f.op == "in":
                clauses.append(col.in_([_coerce(col, v) for v in f.value]))
                continue
            value = _coerce(col, f.value)
            if f.op == "eq":
                clauses.append(col.is_(None) if value is None else col == value)
            elif f.op == "neq":
                clauses.append(col.is_not(None) if value is None else col != value)
            elif f.op == "gt":
                clauses.append(col > value)
            elif f.op == "gte":
                clauses.append(col >= value)
            elif f.op == "lt":
                clauses.append(col < value)
            elif f.op == "lte":
                clauses.append(col <= value)
        return and_(*clauses) if clauses else None

    def _fail(self, table: str, exc: SQLAlchemyError):
        self.db.rollback()
        if isinstance(exc, IntegrityError) and "unique" in str(exc.orig).lower():
            logger.warning(f"Unique constraint violated on {table}: {exc.orig}")
            raise UniqueViolation(f"Duplicate row for {table}", table=table) from exc
        logger.error(f"Store call on {table} failed: {exc}")
        raise DataStoreError(f"Query on {table} failed", table=table) from exc

    def _rows_by_id(self, table: Table, ids: List[str]) -> List[Row]:
        if not ids:
            return []
        result = self.db.execute(select(table).where(table.c.id.in_(ids)))
        by_id = {r["id"]: dict(r) for r in result.mappings()}
        return [by_id[i] for i in ids if i in by_id]

    # ----------------------------------------------------------------- contract

    def select(self, table, columns=None, filters=None, order_by=None, limit=None) -> List[Row]:
        t = self._table(table)
        cols = [self._column(t, c) for c in columns] if columns else [t]
        stmt = select(*cols)
        where = self._where(t, filters)
        if where is not None:
            stmt = stmt.where(where)
        for key in order_by or []:
            col = self._column(t, key.lstrip("-"))
            stmt = stmt.order_by(col.desc() if key.startswith("-") else col.asc())
        if limit is not None:
            stmt = stmt.limit(limit)
        try:
            return [dict(r) for r in self.db.execute(stmt).mappings()]
        except SQLAlchemyError as e:
            self._fail(table, e)

    def insert(self, table, rows) -> List[Row]:
        t = self._table(table)
        ids = []
        try:
            for row in rows:
                values = self._values(t, row)
                if "id" in t.c and not values.get("id"):
                    values["id"] = new_id()
                self.db.execute(insert(t).values(**values))
                ids.append(values.get("id"))
            self.db.commit()
        except SQLAlchemyError as e:
            self._fail(table, e)
        return self._rows_by_id(t, ids)

    def update(self, table, patch, filters) -> List[Row]:
        t = self._table(table)
        where = self._where(t, filters)
        try:
            id_stmt = select(t.c.id)
            if where is not None:
                id_stmt = id_stmt.where(where)
            ids = [r[0] for r in self.db.execute(id_stmt)]
            if ids:
                self.db.execute(update(t).where(t.c.id.in_(ids)).values(**self._values(t, patch)))
                self.db.commit()
            return self._rows_by_id(t, ids)
        except SQLAlchemyError as e:
            self._fail(table, e)

    def upsert(self, table, rows, conflict_keys) -> List[Row]:
        """Find-by-natural-key then insert-or-update, one row at a time."""
        t = self._table(table)
        keys = [self._column(t, k) for k in conflict_keys]
        ids = []
        try:
            for row in rows:
                values = self._values(t, row)
                match = and_(*[col == values.get(col.name) for col in keys])
                existing = self.db.execute(select(t.c.id).where(match)).first()
                if existing:
                    patch = {k: v for k, v in values.items() if k != "id"}
                    self.db.execute(update(t).where(t.c.id == existing[0]).values(**patch))
                    ids.append(existing[0])
                else:
                    values.setdefault("id", new_id())
                    self.db.execute(insert(t).values(**values))
                    ids.append(values["id"])
            self.db.commit()
        except SQLAlchemyError as e:
            self._fail(table, e)
        return self._rows_by_id(t, ids)

    def delete(self, table, filters) -> int:
        t = self._table(table)
        stmt = delete(t)
        where = self._where(t, filters)
        if where is not None:
            stmt = stmt.where(where)
        try:
            result = self.db.execute(stmt)
            self.db.commit()
            return result.rowcount or 0
        except SQLAlchemyError as e:
            self._fail(table, e)

    def rpc(self, name, args) -> Any:
        procedure = self.procedures.get(name)
        if procedure is None:
            raise DataStoreError(f"Unknown procedure '{name}'")
        try:
            return procedure(self.db, args)
        except SQLAlchemyError as e:
            self._fail(name, e)
