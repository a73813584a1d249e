import logging
from typing import Dict, List

from garment_erp.data.store import DataStore
from garment_erp.schemas.people import EmployeeCreate, EmployeeUpdate
from garment_erp.services.records import delete_row, get_row, list_rows, optional_patch, toggle_active, update_row

logger = logging.getLogger(__name__)


def create_employee(store: DataStore, payload: EmployeeCreate) -> Dict:
    employee = store.insert("employees", [payload.model_dump()])[0]
    logger.info(f"Employee {employee['id']} created")
    return employee


def list_employees(store: DataStore) -> List[Dict]:
    return list_rows(store, "employees")


def get_employee(store: DataStore, employee_id: str) -> Dict:
    return get_row(store, "employees", "Employee", employee_id)


def update_employee(store: DataStore, employee_id: str, updates: EmployeeUpdate) -> Dict:
    return update_row(store, "employees", "Employee", employee_id, optional_patch(updates))


def toggle_employee_status(store: DataStore, employee_id: str) -> Dict:
    return toggle_active(store, "employees", "Employee", employee_id)


def delete_employee(store: DataStore, employee_id: str) -> bool:
    return delete_row(store, "employees", "Employee", employee_id)
