from typing import List

from fastapi import APIRouter, Depends, status

from garment_erp.data.store import DataStore
from garment_erp.dependencies import get_store
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
from garment_erp.services import production_service

router = APIRouter(prefix="/production", tags=["production"])


@router.post("", response_model=ProductionCreateResult, status_code=status.HTTP_201_CREATED)
def create_production(payload: ProductionCreate, store: DataStore = Depends(get_store)):
    """
    Creates the production and copies the product's operations into it.
    ``operations_error`` is set when the copy failed but the production was kept.
    """
    return production_service.create_production(store, payload)


@router.get("", response_model=List[ProductionRow])
def list_productions(store: DataStore = Depends(get_store)):
    return production_service.list_productions(store)


@router.get("/{production_id}", response_model=ProductionDetail)
def get_production(production_id: str, store: DataStore = Depends(get_store)):
    return production_service.get_production(store, production_id)


@router.put("/{production_id}")
def update_production(production_id: str, updates: ProductionUpdate, store: DataStore = Depends(get_store)):
    return production_service.update_production(store, production_id, updates)


@router.get("/{production_id}/finished-pieces")
def get_finished_pieces(production_id: str, store: DataStore = Depends(get_store)):
    return {"production_id": production_id, "finished_pieces": production_service.finished_pieces(store, production_id)}


@router.post(
    "/{production_id}/operations",
    response_model=ProductionOperationRecord,
    status_code=status.HTTP_201_CREATED,
)
def add_production_operation(
    production_id: str, payload: ProductionOperationCreate, store: DataStore = Depends(get_store)
):
    return production_service.insert_production_operation(store, production_id, payload)


@router.put("/{production_id}/operations/{record_id}", response_model=ProductionOperationRecord)
def assign_worker(
    production_id: str,
    record_id: str,
    assignment: AssignWorkerRequest,
    store: DataStore = Depends(get_store),
):
    return production_service.assign_worker_to_operation(store, production_id, record_id, assignment)


@router.delete("/{production_id}/operations/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_production_operation(production_id: str, record_id: str, store: DataStore = Depends(get_store)):
    production_service.delete_production_operation(store, record_id)
