"""Single-row helpers shared by the master-data services."""
from typing import Dict, List, Optional, Sequence

from garment_erp.core.exceptions import NotFoundError
from garment_erp.data.store import DataStore, Filter, eq


def get_row(store: DataStore, table: str, entity: str, row_id: str, scope: Sequence[Filter] = ()) -> Dict:
    rows = store.select(table, filters=[eq("id", row_id), *scope], limit=1)
    if not rows:
        raise NotFoundError(entity, row_id)
    return rows[0]


def list_rows(store: DataStore, table: str, scope: Sequence[Filter] = ()) -> List[Dict]:
    """Newest first."""
    return store.select(table, filters=list(scope), order_by=["-created_at"])


def update_row(
    store: DataStore, table: str, entity: str, row_id: str, patch: Dict, scope: Sequence[Filter] = ()
) -> Dict:
    if not patch:
        return get_row(store, table, entity, row_id, scope)
    rows = store.update(table, patch, [eq("id", row_id), *scope])
    if not rows:
        raise NotFoundError(entity, row_id)
    return rows[0]


def toggle_active(store: DataStore, table: str, entity: str, row_id: str, scope: Sequence[Filter] = ()) -> Dict:
    current = get_row(store, table, entity, row_id, scope)
    return update_row(store, table, entity, row_id, {"is_active": not current.get("is_active", True)}, scope)


def delete_row(store: DataStore, table: str, entity: str, row_id: str, scope: Sequence[Filter] = ()) -> bool:
    if not store.delete(table, [eq("id", row_id), *scope]):
        raise NotFoundError(entity, row_id)
    return True


def optional_patch(model, exclude: Optional[set] = None) -> Dict:
    return model.model_dump(exclude_none=True, exclude=exclude)
