from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from garment_erp.data.store import DataStore
from garment_erp.dependencies import get_store
from garment_erp.schemas.people import WorkerCreate, WorkerUpdate
from garment_erp.schemas.salary import WorkerOperationLine
from garment_erp.services import salary_service, worker_service

router = APIRouter(prefix="/workers", tags=["workers"])


@router.post("", status_code=status.HTTP_201_CREATED)
def create_worker(payload: WorkerCreate, store: DataStore = Depends(get_store)):
    return worker_service.create_worker(store, payload)


@router.get("")
def list_workers(store: DataStore = Depends(get_store)):
    return worker_service.list_workers(store)


@router.get("/{worker_id}")
def get_worker(worker_id: str, store: DataStore = Depends(get_store)):
    return worker_service.get_worker(store, worker_id)


@router.get("/{worker_id}/operations", response_model=List[WorkerOperationLine])
def get_worker_operations(
    worker_id: str,
    month: Optional[int] = Query(None, ge=1, le=12),
    year: Optional[int] = None,
    store: DataStore = Depends(get_store),
):
    """Piece-rate entries of a worker, optionally limited to one month."""
    return salary_service.get_worker_operations(store, worker_id, month, year)


@router.put("/{worker_id}")
def update_worker(worker_id: str, updates: WorkerUpdate, store: DataStore = Depends(get_store)):
    return worker_service.update_worker(store, worker_id, updates)


@router.post("/{worker_id}/toggle")
def toggle_worker(worker_id: str, store: DataStore = Depends(get_store)):
    return worker_service.toggle_worker_status(store, worker_id)


@router.delete("/{worker_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_worker(worker_id: str, store: DataStore = Depends(get_store)):
    worker_service.delete_worker(store, worker_id)
