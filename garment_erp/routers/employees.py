from fastapi import APIRouter, Depends, status

from garment_erp.data.store import DataStore
from garment_erp.dependencies import get_store
from garment_erp.schemas.people import EmployeeCreate, EmployeeUpdate
from garment_erp.services import attendance_service, employee_service

router = APIRouter(prefix="/employees", tags=["employees"])


@router.post("", status_code=status.HTTP_201_CREATED)
def create_employee(payload: EmployeeCreate, store: DataStore = Depends(get_store)):
    return employee_service.create_employee(store, payload)


@router.get("")
def list_employees(store: DataStore = Depends(get_store)):
    return employee_service.list_employees(store)


@router.get("/active")
def list_active_employees(store: DataStore = Depends(get_store)):
    return attendance_service.get_active_employees(store)


@router.get("/{employee_id}")
def get_employee(employee_id: str, store: DataStore = Depends(get_store)):
    return employee_service.get_employee(store, employee_id)


@router.put("/{employee_id}")
def update_employee(employee_id: str, updates: EmployeeUpdate, store: DataStore = Depends(get_store)):
    return employee_service.update_employee(store, employee_id, updates)


@router.post("/{employee_id}/toggle")
def toggle_employee(employee_id: str, store: DataStore = Depends(get_store)):
    return employee_service.toggle_employee_status(store, employee_id)


@router.delete("/{employee_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_employee(employee_id: str, store: DataStore = Depends(get_store)):
    employee_service.delete_employee(store, employee_id)
