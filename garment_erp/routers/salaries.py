"""
Salaries Router

Employee monthly salaries (reconciled from attendance) and worker piece-rate
salaries. Business rules live in the salary service layer.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Request, status

from garment_erp.core.limiter import limiter
from garment_erp.core.schemas import ApiResponse
from garment_erp.data.store import DataStore
from garment_erp.dependencies import get_store
from garment_erp.schemas.salary import (
    AdvanceRequest,
    BulkUpdateResult,
    EmployeeSalaryCreate,
    EmployeeSalaryRecord,
    EmployeeSalaryUpdate,
    MarkPaidRequest,
    MarkWorkerPaidRequest,
    ReconcileRequest,
    ReconcileSummary,
    WorkerSalaryCreate,
    WorkerSalaryRecord,
)
from garment_erp.services import salary_service

router = APIRouter(prefix="/salaries", tags=["salaries"])


# --- Employee salaries ---

@router.post("/employees/reconcile", response_model=ApiResponse[ReconcileSummary])
@limiter.limit("10/minute")
def reconcile_employee_salaries(
    request: Request,
    payload: Optional[ReconcileRequest] = None,
    store: DataStore = Depends(get_store),
):
    """
    Create or refresh this month's salary row for every active employee.
    Paid rows are skipped; per-employee failures are reported, not raised.
    """
    summary = salary_service.reconcile_summary(store, payload.reference_date if payload else None)
    warnings = []
    if summary.errors:
        warnings.append(f"{summary.errors} employee(s) could not be reconciled")
    if summary.incomplete_attendance:
        warnings.append(f"{summary.incomplete_attendance} employee(s) have incomplete attendance for {summary.salary_month}")
    return ApiResponse.ok(summary, metadata={"employees": len(summary.results)}, warnings=warnings)


@router.get("/employees", response_model=List[EmployeeSalaryRecord])
def list_employee_salaries(store: DataStore = Depends(get_store)):
    return salary_service.list_employee_salaries(store)


@router.post("/employees", response_model=EmployeeSalaryRecord, status_code=status.HTTP_201_CREATED)
def create_employee_salary(payload: EmployeeSalaryCreate, store: DataStore = Depends(get_store)):
    return salary_service.create_employee_salary(store, payload)


@router.post("/employees/mark-paid", response_model=BulkUpdateResult)
def mark_employee_salaries_paid(payload: MarkPaidRequest, store: DataStore = Depends(get_store)):
    return salary_service.mark_employee_salaries_paid(store, payload.ids, payload.paid_by)


@router.put("/employees/{salary_id}", response_model=EmployeeSalaryRecord)
def update_employee_salary(salary_id: str, updates: EmployeeSalaryUpdate, store: DataStore = Depends(get_store)):
    return salary_service.update_employee_salary(store, salary_id, updates)


@router.post("/employees/{salary_id}/advance", response_model=EmployeeSalaryRecord)
def record_employee_advance(salary_id: str, payload: AdvanceRequest, store: DataStore = Depends(get_store)):
    return salary_service.record_employee_advance(store, salary_id, payload.amount)


# --- Worker salaries ---

@router.get("/workers", response_model=List[WorkerSalaryRecord])
def list_worker_salaries(store: DataStore = Depends(get_store)):
    return salary_service.list_worker_salaries(store)


@router.post("/workers", response_model=WorkerSalaryRecord, status_code=status.HTTP_201_CREATED)
def add_worker_salary(payload: WorkerSalaryCreate, store: DataStore = Depends(get_store)):
    return salary_service.add_worker_salary(store, payload)


@router.post("/workers/mark-paid", response_model=BulkUpdateResult)
def mark_worker_salaries_paid(payload: MarkWorkerPaidRequest, store: DataStore = Depends(get_store)):
    return salary_service.mark_worker_salaries_paid(
        store,
        ids=payload.ids,
        paid_by=payload.paid_by,
        worker_id=payload.worker_id,
        month=payload.month,
        year=payload.year,
    )
