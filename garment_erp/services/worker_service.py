import logging
from typing import Dict, List

from garment_erp.data.store import DataStore
from garment_erp.schemas.people import WorkerCreate, WorkerUpdate
from garment_erp.services.records import delete_row, get_row, list_rows, optional_patch, toggle_active, update_row

logger = logging.getLogger(__name__)


def create_worker(store: DataStore, payload: WorkerCreate) -> Dict:
    worker = store.insert("workers", [payload.model_dump()])[0]
    logger.info(f"Worker {worker['id']} created")
    return worker


def list_workers(store: DataStore) -> List[Dict]:
    return list_rows(store, "workers")


def get_worker(store: DataStore, worker_id: str) -> Dict:
    return get_row(store, "workers", "Worker", worker_id)


def update_worker(store: DataStore, worker_id: str, updates: WorkerUpdate) -> Dict:
    return update_row(store, "workers", "Worker", worker_id, optional_patch(updates))


def toggle_worker_status(store: DataStore, worker_id: str) -> Dict:
    return toggle_active(store, "workers", "Worker", worker_id)


def delete_worker(store: DataStore, worker_id: str) -> bool:
    return delete_row(store, "workers", "Worker", worker_id)
