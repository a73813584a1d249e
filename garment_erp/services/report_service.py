"""
Report Service

Fetchers normalise raw rows and attach display names; the calculators are
pure and work on the normalised records so they can be reused by the
dashboard and tested without a store.
"""
import logging
from datetime import date
from typing import List, Optional, Sequence

from garment_erp.core.exceptions import DataStoreError
from garment_erp.data.store import DataStore, eq
from garment_erp.schemas.common import to_date, to_float, to_int
from garment_erp.schemas.production import ProductionOperationRecord, ProductionRow
from garment_erp.schemas.report import OperationExpense, OperationWiseRow, ProductionReport, WorkerAggregate
from garment_erp.schemas.salary import WorkerSalaryRecord
from garment_erp.services.lookups import lookup
from garment_erp.services.period_filter import Period, efficiency
from garment_erp.services.piece_rate import aggregate_by_worker, filter_period, operation_expense_breakdown
from garment_erp.services.salary_service import list_worker_salaries

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Fetchers
# ---------------------------------------------------------------------------

def fetch_productions(store: DataStore) -> List[ProductionRow]:
    rows = store.select("production", order_by=["-created_at"])
    products = lookup(store, "products", (r.get("product_id") for r in rows))
    return [ProductionRow.from_row(r, products) for r in rows]


def fetch_production_operations(store: DataStore, production_id: str) -> List[ProductionOperationRecord]:
    if not production_id:
        return []
    rows = store.select(
        "production_operation",
        filters=[eq("production_id", production_id)],
        order_by=["created_at"],
    )
    operations = lookup(store, "operations", (r.get("operation_id") for r in rows), ("id", "name", "amount_per_piece"))
    return [ProductionOperationRecord.from_row(r, operations) for r in rows]


def fetch_worker_salaries(store: DataStore) -> List[WorkerSalaryRecord]:
    return list_worker_salaries(store)


def fetch_operation_wise_report(store: DataStore) -> List[OperationWiseRow]:
    """Every production-operation row with product, PO, operation and worker names."""
    rows = store.select("production_operation", order_by=["-date"])
    if not rows:
        return []

    productions = lookup(store, "production", (r.get("production_id") for r in rows), ("id", "po_number", "product_id"))
    products = lookup(store, "products", (p.get("product_id") for p in productions.values()))
    operations = lookup(store, "operations", (r.get("operation_id") for r in rows), ("id", "name", "amount_per_piece"))
    workers = lookup(store, "workers", (r.get("worker_id") for r in rows))

    report = []
    for r in rows:
        prod = productions.get(r.get("production_id")) or {}
        product = products.get(prod.get("product_id")) or {}
        op = operations.get(r.get("operation_id")) or {}
        worker_name = r.get("worker_name")
        if not worker_name:
            worker_name = (workers.get(r.get("worker_id")) or {}).get("name") if r.get("worker_id") else "Unknown Worker"
        report.append(OperationWiseRow(
            id=r["id"],
            product_name=product.get("name") or "Unknown Product",
            po_number=prod.get("po_number") or "-",
            operation_name=op.get("name") or "Unknown Operation",
            worker_name=worker_name,
            date=to_date(r.get("date")),
            quantity=to_int(r.get("pieces_done")),
            rate=to_float(op.get("amount_per_piece")),
            total=to_float(r.get("earnings")),
            product_id=prod.get("product_id"),
            operation_id=r.get("operation_id"),
            worker_id=r.get("worker_id"),
        ))
    return report


def product_cost_per_piece(store: DataStore, product_id: Optional[str]) -> float:
    """Material + thread + other costs of a product; 0 when unknown."""
    if not product_id:
        return 0.0
    try:
        rows = store.select(
            "products",
            columns=["material_cost", "thread_cost", "other_costs"],
            filters=[eq("id", product_id)],
            limit=1,
        )
    except DataStoreError as e:
        logger.warning(f"Cost lookup failed for product {product_id}: {e.message}")
        return 0.0
    if not rows:
        return 0.0
    row = rows[0]
    return to_float(row.get("material_cost")) + to_float(row.get("thread_cost")) + to_float(row.get("other_costs"))


# ---------------------------------------------------------------------------
# Calculators
# ---------------------------------------------------------------------------

def _report(rows: Sequence[ProductionOperationRecord], cost_per_piece: float) -> ProductionReport:
    quantity = sum(r.pieces_done for r in rows)
    expense = round(sum(r.earnings for r in rows), 2)
    return ProductionReport(
        production_quantity=quantity,
        operation_expense=expense,
        raw_material_cost=round(quantity * cost_per_piece, 2),
        total_expense=expense,
        efficiency=efficiency(quantity, len(rows)),
    )


def production_report(
    records: Sequence[ProductionOperationRecord],
    period: Period,
    reference: Optional[date] = None,
    cost_per_piece: float = 0.0,
) -> ProductionReport:
    return _report(filter_period(records, period, reference), cost_per_piece)


def custom_report(
    records: Sequence[ProductionOperationRecord],
    start,
    end,
    cost_per_piece: float = 0.0,
) -> ProductionReport:
    """Report over ``start <= date <= end``; a missing bound gives an empty report."""
    start, end = to_date(start), to_date(end)
    if start is None or end is None:
        return ProductionReport()
    rows = [r for r in records if r.date is not None and start <= r.date <= end]
    return _report(rows, cost_per_piece)


def operations_chart(
    records: Sequence[ProductionOperationRecord],
    period: Period,
    reference: Optional[date] = None,
) -> List[OperationExpense]:
    return list(operation_expense_breakdown(records, period, reference).values())


def worker_performance(
    records: Sequence[WorkerSalaryRecord],
    period: Period,
    reference: Optional[date] = None,
) -> List[WorkerAggregate]:
    return aggregate_by_worker(records, period, reference)
