from fastapi import APIRouter, Depends, status

from garment_erp.data.store import DataStore
from garment_erp.dependencies import get_store
from garment_erp.schemas.people import SupervisorCreate, SupervisorUpdate
from garment_erp.services import supervisor_service

router = APIRouter(prefix="/supervisors", tags=["supervisors"])


@router.get("")
def list_supervisors(store: DataStore = Depends(get_store)):
    return supervisor_service.list_supervisors(store)


@router.post("", status_code=status.HTTP_201_CREATED)
def add_supervisor(payload: SupervisorCreate, store: DataStore = Depends(get_store)):
    return supervisor_service.add_supervisor(store, payload)


@router.put("/{supervisor_id}")
def update_supervisor(supervisor_id: str, updates: SupervisorUpdate, store: DataStore = Depends(get_store)):
    return supervisor_service.update_supervisor(store, supervisor_id, updates)


@router.post("/{supervisor_id}/toggle")
def toggle_supervisor(supervisor_id: str, store: DataStore = Depends(get_store)):
    return supervisor_service.toggle_supervisor_status(store, supervisor_id)


@router.delete("/{supervisor_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_supervisor(supervisor_id: str, store: DataStore = Depends(get_store)):
    supervisor_service.delete_supervisor(store, supervisor_id)
