"""
Attendance Service

Daily attendance marking and the monthly Attendance Summarizer used by
salary reconciliation.

Read helpers swallow store failures (logged, empty result) because they feed
screens that should still render; writes let ``DataStoreError`` propagate.
"""
import calendar
import logging
from collections import defaultdict
from datetime import date
from typing import Dict, List, Optional, Sequence

from garment_erp.core.exceptions import DataStoreError, ValidationFailed
from garment_erp.data.store import DataStore, eq, gte, lt, lte
from garment_erp.models.attendance import AttendanceStatus
from garment_erp.schemas.attendance import (
    AttendanceRecord,
    AttendanceRowIn,
    AttendanceSummary,
    MarkAttendanceResult,
)

logger = logging.getLogger(__name__)

ATTENDANCE_KEY = ("person_type", "person_id", "date")
VALID_STATUSES = {s.value for s in AttendanceStatus}


def month_bounds(month: int, year: int):
    """First and last calendar day of the month, plus its length."""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day), last_day


def summarize_attendance(
    store: DataStore,
    person_id: str,
    month: int,
    year: int,
    person_type: str = "employee",
) -> Optional[AttendanceSummary]:
    """
    Count present / absent / leave days for one person in a calendar month.

    ``total_days`` is the length of the month, not the number of rows found.
    Returns None only when the query itself fails; a month without any rows
    yields an all-zero summary.
    """
    first, last, last_day = month_bounds(month, year)
    try:
        rows = store.select(
            "attendance",
            columns=["status", "date"],
            filters=[
                eq("person_type", person_type),
                eq("person_id", person_id),
                gte("date", first),
                lte("date", last),
            ],
        )
    except DataStoreError as e:
        logger.error(f"Attendance summary failed for {person_type} {person_id} ({year}-{month:02d}): {e.message}")
        return None

    counts = defaultdict(int)
    for row in rows:
        counts[str(row.get("status") or "").lower()] += 1

    present = counts[AttendanceStatus.PRESENT.value]
    return AttendanceSummary(
        total_days=last_day,
        present=present,
        absent=counts[AttendanceStatus.ABSENT.value],
        leave=counts[AttendanceStatus.LEAVE.value],
        percentage=present / last_day,
    )


def get_active_employees(store: DataStore) -> List[Dict]:
    try:
        return store.select(
            "employees",
            columns=["id", "name", "is_active", "salary_amount"],
            filters=[eq("is_active", True)],
            order_by=["name"],
        )
    except DataStoreError as e:
        logger.error(f"get_active_employees failed: {e.message}")
        return []


def get_attendance_by_date(store: DataStore, on_date: date) -> List[AttendanceRecord]:
    try:
        rows = store.select(
            "attendance",
            filters=[eq("date", on_date), eq("person_type", "employee")],
        )
    except DataStoreError as e:
        logger.error(f"get_attendance_by_date failed for {on_date}: {e.message}")
        return []
    return [AttendanceRecord.from_row(r) for r in rows]


def get_attendance_for_employee_in_range(
    store: DataStore, employee_id: str, start: date, end: date
) -> List[AttendanceRecord]:
    """Rows with ``start <= date < end``."""
    try:
        rows = store.select(
            "attendance",
            filters=[
                eq("person_type", "employee"),
                eq("person_id", employee_id),
                gte("date", start),
                lt("date", end),
            ],
            order_by=["date"],
        )
    except DataStoreError as e:
        logger.error(f"Attendance range query failed for employee {employee_id}: {e.message}")
        return []
    return [AttendanceRecord.from_row(r) for r in rows]


def get_attendance_for_month(store: DataStore, month: int, year: int) -> List[AttendanceRecord]:
    first, last, _ = month_bounds(month, year)
    try:
        rows = store.select(
            "attendance",
            filters=[eq("person_type", "employee"), gte("date", first), lte("date", last)],
            order_by=["date"],
        )
    except DataStoreError as e:
        logger.error(f"get_attendance_for_month failed for {year}-{month:02d}: {e.message}")
        return []
    return [AttendanceRecord.from_row(r) for r in rows]


def _check_status(status: str):
    if status not in VALID_STATUSES:
        raise ValidationFailed(
            f"Invalid attendance status '{status}'",
            details={"allowed": sorted(VALID_STATUSES)},
        )


def _upsert_unlocked(store: DataStore, rows: Sequence[AttendanceRowIn]) -> MarkAttendanceResult:
    """
    Upsert attendance rows, skipping employees whose salary for that month is
    already paid (their attendance is frozen along with the salary).
    """
    from garment_erp.services.salary_service import get_paid_employee_ids_for_month

    paid_by_month: Dict[tuple, set] = {}
    to_save, skipped = [], []
    for row in rows:
        _check_status(row.status)
        if row.person_type == "employee":
            key = (row.date.month, row.date.year)
            if key not in paid_by_month:
                paid_by_month[key] = set(get_paid_employee_ids_for_month(store, *key))
            if row.person_id in paid_by_month[key]:
                skipped.append(row.person_id)
                continue
        to_save.append(row.model_dump())

    if to_save:
        store.upsert("attendance", to_save, ATTENDANCE_KEY)
    if skipped:
        logger.info(f"Attendance left unchanged for {len(skipped)} employee(s) with paid salary")
    return MarkAttendanceResult(saved=len(to_save), skipped_paid=skipped)


def mark_attendance(
    store: DataStore,
    on_date: date,
    statuses: Dict[str, str],
    marked_by: Optional[str] = None,
) -> MarkAttendanceResult:
    """
    Record one day's attendance for every active employee. Employees missing
    from ``statuses`` are marked absent; re-marking a day overwrites it.
    """
    for status in statuses.values():
        _check_status(status)
    employees = store.select("employees", columns=["id"], filters=[eq("is_active", True)])
    rows = [
        AttendanceRowIn(
            person_type="employee",
            person_id=emp["id"],
            date=on_date,
            status=statuses.get(emp["id"], AttendanceStatus.ABSENT.value),
            marked_by_employee_id=marked_by,
        )
        for emp in employees
    ]
    return _upsert_unlocked(store, rows)


def bulk_update_attendance(store: DataStore, rows: Sequence[AttendanceRowIn]) -> MarkAttendanceResult:
    if not rows:
        return MarkAttendanceResult(saved=0)
    return _upsert_unlocked(store, rows)
