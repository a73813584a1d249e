"""
Dashboard Service

One call assembles every dashboard tile. The dashboard must always render,
so any store failure yields the zeroed default payload instead of an error.
"""
import logging
from collections import Counter, defaultdict
from datetime import date
from typing import Optional

from garment_erp.core.exceptions import DataStoreError
from garment_erp.data.store import DataStore, eq, in_, neq
from garment_erp.schemas.common import to_date, to_float, to_int
from garment_erp.schemas.report import (
    DashboardData,
    ProductionProgressItem,
    RecentOperationItem,
    WorkerCounts,
)
from garment_erp.services.lookups import lookup
from garment_erp.services.piece_rate import production_progress

logger = logging.getLogger(__name__)

PROGRESS_LIMIT = 20
RECENT_OPS_LIMIT = 10


def _progress(store: DataStore):
    productions = store.select(
        "production",
        columns=["id", "product_id", "total_quantity", "po_number", "status"],
        filters=[neq("status", "completed")],
        order_by=["-created_at"],
        limit=PROGRESS_LIMIT,
    )
    if not productions:
        return []

    done = defaultdict(int)
    for r in store.select(
        "production_operation",
        columns=["production_id", "pieces_done"],
        filters=[in_("production_id", [p["id"] for p in productions])],
    ):
        done[r["production_id"]] += to_int(r.get("pieces_done"))

    product_ids = sorted({p["product_id"] for p in productions if p.get("product_id")})
    products = lookup(store, "products", product_ids)
    op_counts = Counter(
        o["product_id"]
        for o in store.select("operations", columns=["product_id"], filters=[in_("product_id", product_ids)])
    ) if product_ids else Counter()

    items = []
    for p in productions:
        qty = to_int(p.get("total_quantity"))
        completed = done.get(p["id"], 0)
        items.append(ProductionProgressItem(
            id=p["id"],
            product_name=(products.get(p.get("product_id")) or {}).get("name") or f"Prod {p['id']}",
            po_number=p.get("po_number") or "N/A",
            progress=production_progress(qty, op_counts.get(p.get("product_id"), 0), completed),
            total_quantity=qty,
            completed_pieces=completed,
        ))
    return items


def _recent_operations(store: DataStore):
    rows = store.select(
        "worker_salaries",
        columns=["id", "worker_id", "operation_id", "product_id", "pieces_done", "total_amount", "date"],
        order_by=["-date", "-created_at"],
        limit=RECENT_OPS_LIMIT,
    )
    workers = lookup(store, "workers", (r.get("worker_id") for r in rows))
    operations = lookup(store, "operations", (r.get("operation_id") for r in rows))
    products = lookup(store, "products", (r.get("product_id") for r in rows))

    def name(lookup_map, key):
        return (lookup_map.get(key) or {}).get("name") or key if key else None

    return [
        RecentOperationItem(
            id=r["id"],
            worker_id=r.get("worker_id"),
            worker_name=name(workers, r.get("worker_id")),
            operation_id=r.get("operation_id"),
            operation_name=name(operations, r.get("operation_id")),
            product_id=r.get("product_id"),
            product_name=name(products, r.get("product_id")),
            pieces=to_int(r.get("pieces_done")),
            earnings=to_float(r.get("total_amount")),
            date=to_date(r.get("date")),
        )
        for r in rows
    ]


def get_dashboard_data(store: DataStore, today: Optional[date] = None) -> DashboardData:
    today = today or date.today()

    try:
        workers = store.select("workers", columns=["id", "is_active"])
        active_products = store.select("products", columns=["id"], filters=[eq("is_active", True)])
        todays_ops = store.select("production_operation", columns=["id", "pieces_done"], filters=[eq("date", today)])
        unpaid = store.select("worker_salaries", columns=["total_amount"], filters=[eq("paid", False)])

        return DashboardData(
            workers=WorkerCounts(
                total=len(workers),
                active=sum(1 for w in workers if w.get("is_active", True)),
            ),
            active_products=len(active_products),
            todays_production=sum(to_int(r.get("pieces_done")) for r in todays_ops),
            pending_payments=round(sum(to_float(r.get("total_amount")) for r in unpaid), 2),
            workers_ops_today=len(todays_ops),
            production_progress=_progress(store),
            recent_worker_ops=_recent_operations(store),
        )
    except DataStoreError as e:
        logger.error(f"Dashboard data unavailable, serving defaults: {e.message}")
        return DashboardData()
