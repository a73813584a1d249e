"""
Production Service

Production orders and their per-operation work rows. A new production gets
one ``production_operation`` row per operation of its product, which
supervisors then assign to workers and fill with completed pieces.
"""
import logging
from collections import Counter
from datetime import date
from typing import List, Optional

from garment_erp.core.exceptions import DataStoreError, NotFoundError
from garment_erp.data.store import DataStore, eq, in_
from garment_erp.schemas.common import to_float
from garment_erp.schemas.production import (
    AssignWorkerRequest,
    ProductionCreate,
    ProductionCreateResult,
    ProductionDetail,
    ProductionOperationCreate,
    ProductionOperationRecord,
    ProductionRow,
    ProductionUpdate,
)
from garment_erp.services.lookups import lookup
from garment_erp.services.piece_rate import bottleneck_finished_pieces
from garment_erp.services.records import delete_row, get_row, optional_patch, update_row
from garment_erp.services.report_service import fetch_production_operations, fetch_productions
from garment_erp.services.salary_service import round2

logger = logging.getLogger(__name__)


def _master_rate(store: DataStore, operation_id: Optional[str]) -> float:
    if not operation_id:
        return 0.0
    master = lookup(store, "operations", [operation_id], ("id", "amount_per_piece")).get(operation_id) or {}
    return to_float(master.get("amount_per_piece"))


def create_production(store: DataStore, payload: ProductionCreate) -> ProductionCreateResult:
    """
    Insert the production, then copy the product's operations into it with
    zero pieces. The copy is best-effort: if it fails the production is kept
    and the failure is reported in ``operations_error``.
    """
    get_row(store, "products", "Product", payload.product_id)
    production = store.insert("production", [payload.model_dump()])[0]

    try:
        operations = store.select("operations", columns=["id"], filters=[eq("product_id", payload.product_id)])
        created = []
        if operations:
            today = date.today()
            created = store.insert("production_operation", [
                {
                    "production_id": production["id"],
                    "operation_id": op["id"],
                    "worker_id": None,
                    "worker_name": None,
                    "pieces_done": 0,
                    "earnings": 0.0,
                    "date": today,
                }
                for op in operations
            ])
    except DataStoreError as e:
        logger.error(f"Production {production['id']} created but copying operations failed: {e.message}")
        return ProductionCreateResult(production=production, operations_error=e.message)

    logger.info(f"Production {production['id']} created with {len(created)} operation row(s)")
    return ProductionCreateResult(production=production, operations_created=len(created))


def list_productions(store: DataStore) -> List[ProductionRow]:
    """Newest first, with product name and the product's operation count."""
    productions = fetch_productions(store)
    product_ids = sorted({p.product_id for p in productions if p.product_id})
    counts = Counter()
    if product_ids:
        try:
            ops = store.select("operations", columns=["product_id"], filters=[in_("product_id", product_ids)])
            counts.update(o["product_id"] for o in ops)
        except DataStoreError as e:
            logger.warning(f"Operation counts unavailable: {e.message}")
    for p in productions:
        p.operation_count = counts.get(p.product_id, 0) if p.product_id else 0
    return productions


def get_production(store: DataStore, production_id: str) -> ProductionDetail:
    production = get_row(store, "production", "Production", production_id)
    operations = fetch_production_operations(store, production_id)
    product = lookup(store, "products", [production.get("product_id")]).get(production.get("product_id")) or {}
    return ProductionDetail(
        production=production,
        product_name=product.get("name"),
        operations=operations,
        finished_pieces=bottleneck_finished_pieces(operations),
    )


def update_production(store: DataStore, production_id: str, updates: ProductionUpdate) -> dict:
    return update_row(store, "production", "Production", production_id, optional_patch(updates))


def assign_worker_to_operation(
    store: DataStore, production_id: str, record_id: str, assignment: AssignWorkerRequest
) -> ProductionOperationRecord:
    """
    Set the worker and/or pieces on a production-operation row. Earnings are
    recomputed from the operation's master piece rate whenever pieces change.
    """
    row = get_row(store, "production_operation", "Production operation", record_id)
    if row.get("production_id") != production_id:
        raise NotFoundError("Production operation", record_id)

    patch = assignment.model_dump(exclude_unset=True)
    if "worker_id" in patch:
        patch["worker_id"] = patch["worker_id"] or None
    if "worker_name" in patch:
        patch["worker_name"] = patch["worker_name"] or None
    if patch.get("pieces_done") is None:
        patch.pop("pieces_done", None)
    else:
        patch["earnings"] = round2(patch["pieces_done"] * _master_rate(store, row.get("operation_id")))

    if patch:
        row = store.update("production_operation", patch, [eq("id", record_id)])[0]
    operations = lookup(store, "operations", [row.get("operation_id")], ("id", "name", "amount_per_piece"))
    return ProductionOperationRecord.from_row(row, operations)


def insert_production_operation(
    store: DataStore, production_id: str, payload: ProductionOperationCreate
) -> ProductionOperationRecord:
    get_row(store, "production", "Production", production_id)
    rate = _master_rate(store, payload.operation_id)
    row = payload.model_dump()
    row.update(
        production_id=production_id,
        earnings=round2(payload.pieces_done * rate),
        date=payload.date or date.today(),
    )
    created = store.insert("production_operation", [row])[0]
    operations = lookup(store, "operations", [payload.operation_id], ("id", "name", "amount_per_piece"))
    return ProductionOperationRecord.from_row(created, operations)


def delete_production_operation(store: DataStore, record_id: str) -> bool:
    return delete_row(store, "production_operation", "Production operation", record_id)


def finished_pieces(store: DataStore, production_id: str) -> int:
    return bottleneck_finished_pieces(fetch_production_operations(store, production_id))
