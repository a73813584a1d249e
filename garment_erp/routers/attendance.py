import datetime as dt
from typing import List

from fastapi import APIRouter, Depends, Query

from garment_erp.core.exceptions import DataStoreError
from garment_erp.data.store import DataStore
from garment_erp.dependencies import get_store
from garment_erp.schemas.attendance import (
    AttendanceRecord,
    AttendanceSummary,
    BulkAttendanceRequest,
    MarkAttendanceRequest,
    MarkAttendanceResult,
)
from garment_erp.services import attendance_service

router = APIRouter(prefix="/attendance", tags=["attendance"])


@router.get("", response_model=List[AttendanceRecord])
def get_attendance_by_date(date: dt.date, store: DataStore = Depends(get_store)):
    return attendance_service.get_attendance_by_date(store, date)


@router.get("/month", response_model=List[AttendanceRecord])
def get_attendance_for_month(
    month: int = Query(..., ge=1, le=12),
    year: int = Query(..., ge=1900),
    store: DataStore = Depends(get_store),
):
    return attendance_service.get_attendance_for_month(store, month, year)


@router.get("/employees/{employee_id}", response_model=List[AttendanceRecord])
def get_employee_attendance(
    employee_id: str,
    start: dt.date,
    end: dt.date,
    store: DataStore = Depends(get_store),
):
    """Rows from ``start`` (inclusive) to ``end`` (exclusive)."""
    return attendance_service.get_attendance_for_employee_in_range(store, employee_id, start, end)


@router.get("/summary/{person_id}", response_model=AttendanceSummary)
def get_attendance_summary(
    person_id: str,
    month: int = Query(..., ge=1, le=12),
    year: int = Query(..., ge=1900),
    person_type: str = Query("employee", pattern="^(employee|worker)$"),
    store: DataStore = Depends(get_store),
):
    summary = attendance_service.summarize_attendance(store, person_id, month, year, person_type)
    if summary is None:
        raise DataStoreError("Attendance summary unavailable", table="attendance")
    return summary


@router.post("/mark", response_model=MarkAttendanceResult)
def mark_attendance(payload: MarkAttendanceRequest, store: DataStore = Depends(get_store)):
    """
    Marks the day for every active employee; anyone missing from ``statuses``
    is recorded absent. Employees whose salary for that month is paid are
    left unchanged and listed in ``skipped_paid``.
    """
    return attendance_service.mark_attendance(
        store, payload.date, payload.statuses, payload.marked_by_employee_id
    )


@router.post("/bulk", response_model=MarkAttendanceResult)
def bulk_update_attendance(payload: BulkAttendanceRequest, store: DataStore = Depends(get_store)):
    return attendance_service.bulk_update_attendance(store, payload.rows)
