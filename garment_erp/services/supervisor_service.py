"""
Supervisor Service

Supervisors are employee rows with ``role = supervisor``. Every write is
scoped to that role so this surface cannot touch ordinary employees. A login
is created alongside the employee row when a password is supplied.
"""
import logging
from typing import Dict, List

from garment_erp.core.exceptions import AppException, DataStoreError, ValidationFailed
from garment_erp.data.store import DataStore, eq
from garment_erp.schemas.people import SupervisorCreate, SupervisorUpdate
from garment_erp.services.records import delete_row, list_rows, optional_patch, toggle_active, update_row

logger = logging.getLogger(__name__)

SUPERVISOR_ROLE = "supervisor"
SUPERVISOR_SCOPE = (eq("role", SUPERVISOR_ROLE),)


def list_supervisors(store: DataStore) -> List[Dict]:
    try:
        return list_rows(store, "employees", SUPERVISOR_SCOPE)
    except DataStoreError as e:
        logger.error(f"list_supervisors failed: {e.message}")
        return []


def add_supervisor(store: DataStore, payload: SupervisorCreate) -> Dict:
    if payload.password and not payload.email:
        raise ValidationFailed("An email is required to create a supervisor login")

    row = payload.model_dump(exclude={"password"})
    row["role"] = SUPERVISOR_ROLE
    supervisor = store.insert("employees", [row])[0]

    if payload.password:
        try:
            login = store.rpc("create_employee_user", {
                "employee_id": supervisor["id"],
                "email": payload.email,
                "password": payload.password,
                "role": SUPERVISOR_ROLE,
            })
        except AppException:
            store.delete("employees", [eq("id", supervisor["id"])])
            raise
        supervisor = dict(supervisor, user_id=login["user_id"])

    logger.info(f"Supervisor {supervisor['id']} added")
    return supervisor


def update_supervisor(store: DataStore, supervisor_id: str, updates: SupervisorUpdate) -> Dict:
    # Blank strings leave the field unchanged
    patch = {k: v for k, v in optional_patch(updates).items() if v != ""}
    return update_row(store, "employees", "Supervisor", supervisor_id, patch, SUPERVISOR_SCOPE)


def toggle_supervisor_status(store: DataStore, supervisor_id: str) -> Dict:
    return toggle_active(store, "employees", "Supervisor", supervisor_id, SUPERVISOR_SCOPE)


def delete_supervisor(store: DataStore, supervisor_id: str) -> bool:
    return delete_row(store, "employees", "Supervisor", supervisor_id, SUPERVISOR_SCOPE)
