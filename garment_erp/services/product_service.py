"""
Product Service

Products and their operation masters (the per-piece rates paid for each
sewing step).
"""
import logging
from collections import defaultdict
from typing import Dict, List, Sequence

from garment_erp.core.exceptions import DataStoreError
from garment_erp.data.store import DataStore, eq, in_
from garment_erp.schemas.product import OperationIn, ProductCreate, ProductUpdate
from garment_erp.services.records import delete_row, get_row, list_rows, optional_patch, toggle_active, update_row

logger = logging.getLogger(__name__)

# Client-side placeholder ids for operations that do not exist yet
NEW_OPERATION_PREFIX = "new-"


def _is_existing(op: OperationIn) -> bool:
    return bool(op.id) and not op.id.startswith(NEW_OPERATION_PREFIX)


def _operation_row(product_id: str, op: OperationIn) -> Dict:
    row = op.model_dump(exclude={"id"})
    row["product_id"] = product_id
    return row


def _with_operations(store: DataStore, products: List[Dict]) -> List[Dict]:
    ids = [p["id"] for p in products]
    by_product = defaultdict(list)
    if ids:
        for op in store.select("operations", filters=[in_("product_id", ids)], order_by=["created_at"]):
            by_product[op["product_id"]].append(op)
    return [dict(p, operations=by_product.get(p["id"], [])) for p in products]


def create_product(store: DataStore, payload: ProductCreate) -> Dict:
    product = store.insert("products", [payload.model_dump(exclude={"operations"})])[0]
    if payload.operations:
        store.insert("operations", [_operation_row(product["id"], op) for op in payload.operations])
    logger.info(f"Product {product['id']} created with {len(payload.operations)} operation(s)")
    return get_product(store, product["id"])


def list_products(store: DataStore) -> List[Dict]:
    return _with_operations(store, list_rows(store, "products"))


def get_product(store: DataStore, product_id: str) -> Dict:
    return _with_operations(store, [get_row(store, "products", "Product", product_id)])[0]


def _replace_operations(store: DataStore, product_id: str, operations: Sequence[OperationIn]):
    current = {o["id"] for o in store.select("operations", columns=["id"], filters=[eq("product_id", product_id)])}
    incoming = {op.id for op in operations if _is_existing(op)}

    removed = sorted(current - incoming)
    if removed:
        try:
            store.delete("operations", [in_("id", removed)])
        except DataStoreError as e:
            # Operations referenced by production rows may be undeletable
            logger.warning(f"Could not delete {len(removed)} operation(s) of product {product_id}: {e.message}")

    for op in operations:
        row = _operation_row(product_id, op)
        if _is_existing(op) and op.id in current:
            store.update("operations", row, [eq("id", op.id)])
        else:
            store.insert("operations", [row])


def update_product(store: DataStore, product_id: str, updates: ProductUpdate) -> Dict:
    update_row(store, "products", "Product", product_id, optional_patch(updates, exclude={"operations"}))
    if updates.operations is not None:
        _replace_operations(store, product_id, updates.operations)
    return get_product(store, product_id)


def delete_product(store: DataStore, product_id: str) -> bool:
    get_row(store, "products", "Product", product_id)
    store.delete("operations", [eq("product_id", product_id)])
    return delete_row(store, "products", "Product", product_id)


def toggle_product_status(store: DataStore, product_id: str) -> Dict:
    return toggle_active(store, "products", "Product", product_id)
