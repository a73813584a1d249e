"""
Salary Service Layer

Employee (monthly, attendance pro-rated) and worker (piece-rate) salaries.

Employee rule set:
- daily rate = base salary / calendar days in the month
- gross = (present + leave days) x daily rate, rounded to 2 decimals;
  absent days earn nothing
- net = gross - advance
- once a row is marked paid the reconciler never touches it again
"""
import logging
import re
from datetime import date, datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Optional, Sequence

from garment_erp.core.exceptions import (
    ConflictError,
    DataStoreError,
    NotFoundError,
    UniqueViolation,
    ValidationFailed,
)
from garment_erp.data.store import DataStore, eq, gte, in_, lte
from garment_erp.schemas.common import to_float
from garment_erp.schemas.salary import (
    BulkUpdateResult,
    EmployeeSalaryCreate,
    EmployeeSalaryRecord,
    EmployeeSalaryUpdate,
    ReconcileResult,
    ReconcileStatus,
    ReconcileSummary,
    WorkerOperationLine,
    WorkerSalaryCreate,
    WorkerSalaryRecord,
    format_salary_month,
)
from garment_erp.services.attendance_service import month_bounds, summarize_attendance
from garment_erp.services.lookups import lookup

logger = logging.getLogger(__name__)

_UUID_RE = re.compile(
    r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[1-5][0-9a-fA-F]{3}-[89abAB][0-9a-fA-F]{3}-[0-9a-fA-F]{12}$"
)


def is_uuid(value) -> bool:
    return isinstance(value, str) and bool(_UUID_RE.match(value))


def round2(value: float) -> float:
    return float(Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def compute_gross_salary(base_salary: float, present: int, leave: int, calendar_days: int) -> float:
    daily_salary = base_salary / calendar_days
    return round2((present + leave) * daily_salary)


def compute_net_salary(gross_salary: float, advance: float) -> float:
    return round2(gross_salary - advance)


def _require_uuids(ids: Sequence[str], label: str = "ids"):
    invalid = [i for i in ids if not is_uuid(i)]
    if invalid:
        raise ValidationFailed(
            f"{len(invalid)} of {len(ids)} {label} are not valid UUIDs; nothing was updated",
            details={"invalid_ids": invalid},
        )


def _now():
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Monthly reconciliation
# ---------------------------------------------------------------------------

def _find_salary_row(store: DataStore, employee_id: str, salary_month: str) -> Optional[Dict]:
    rows = store.select(
        "employee_salaries",
        filters=[eq("employee_id", employee_id), eq("salary_month", salary_month)],
        limit=1,
    )
    return rows[0] if rows else None


def _paid_skip(result: ReconcileResult, row: Dict) -> ReconcileResult:
    """Report a paid row as skipped, with the values it actually holds."""
    return result.model_copy(update={
        "status": ReconcileStatus.SKIPPED,
        "salary_id": row["id"],
        "gross_salary": to_float(row.get("gross_salary")),
        "advance": to_float(row.get("advance")),
        "net_salary": to_float(row.get("net_salary")),
        "message": "Salary already paid",
    })


def _reconcile_employee(
    store: DataStore,
    employee: Dict,
    reference_date: date,
    salary_month: str,
    calendar_days: int,
) -> ReconcileResult:
    employee_id = employee["id"]
    base = ReconcileResult(
        employee_id=employee_id,
        employee_name=employee.get("name"),
        status=ReconcileStatus.ERROR,
        salary_month=salary_month,
    )

    summary = summarize_attendance(store, employee_id, reference_date.month, reference_date.year)
    if summary is None:
        logger.warning(f"Skipping salary for employee {employee_id}: attendance unavailable")
        return base.model_copy(update={"message": "Attendance summary unavailable"})

    gross = compute_gross_salary(
        to_float(employee.get("salary_amount")), summary.present, summary.leave, calendar_days
    )
    incomplete = summary.recorded_days < reference_date.day - 1
    if incomplete:
        logger.warning(
            f"Attendance incomplete for employee {employee_id} in {salary_month}: "
            f"{summary.recorded_days} day(s) recorded by day {reference_date.day}"
        )

    result = base.model_copy(update={
        "gross_salary": gross,
        "present_days": summary.present,
        "leave_days": summary.leave,
        "absent_days": summary.absent,
        "attendance_incomplete": incomplete,
    })

    existing = _find_salary_row(store, employee_id, salary_month)
    if existing is None:
        try:
            created = store.insert("employee_salaries", [{
                "employee_id": employee_id,
                "employee_name": employee.get("name"),
                "salary_month": salary_month,
                "gross_salary": gross,
                "advance": 0.0,
                "net_salary": gross,
                "paid": False,
            }])[0]
            return result.model_copy(update={
                "status": ReconcileStatus.CREATED,
                "salary_id": created["id"],
                "advance": 0.0,
                "net_salary": gross,
            })
        except UniqueViolation:
            # Another run created the row first; reconcile against it instead
            logger.info(f"Salary row for {employee_id}/{salary_month} appeared concurrently, updating it")
            existing = _find_salary_row(store, employee_id, salary_month)
            if existing is None:
                raise

    if existing.get("paid"):
        return _paid_skip(result, existing)

    advance = to_float(existing.get("advance"))
    net = compute_net_salary(gross, advance)
    changed = store.update(
        "employee_salaries",
        {"gross_salary": gross, "net_salary": net},
        [eq("id", existing["id"]), eq("paid", False)],
    )
    if not changed:
        # Marked paid (or removed) after it was read; the paid lock won
        current = _find_salary_row(store, employee_id, salary_month)
        if current is None or not current.get("paid"):
            raise DataStoreError(f"Salary row {existing['id']} changed during reconciliation", table="employee_salaries")
        return _paid_skip(result, current)
    return result.model_copy(update={
        "status": ReconcileStatus.UPDATED,
        "salary_id": existing["id"],
        "advance": advance,
        "net_salary": net,
    })


def reconcile_monthly_salaries(store: DataStore, reference_date: Optional[date] = None) -> List[ReconcileResult]:
    """
    Create or refresh the salary row of every active employee for the month
    of ``reference_date``.

    Each employee is processed independently: a failure is recorded as that
    employee's ``error`` result and the batch carries on. Paid rows are
    reported as ``skipped`` and left untouched. Safe to re-run.
    """
    reference_date = reference_date or date.today()
    salary_month = format_salary_month(reference_date)
    _, _, calendar_days = month_bounds(reference_date.month, reference_date.year)

    employees = store.select(
        "employees",
        columns=["id", "name", "salary_amount"],
        filters=[eq("is_active", True)],
        order_by=["name"],
    )
    logger.info(f"Reconciling {salary_month} salaries for {len(employees)} active employee(s)")

    results = []
    for emp in employees:
        try:
            results.append(_reconcile_employee(store, emp, reference_date, salary_month, calendar_days))
        except DataStoreError as e:
            logger.error(f"Salary reconciliation failed for employee {emp['id']}: {e.message}")
            results.append(ReconcileResult(
                employee_id=emp["id"],
                employee_name=emp.get("name"),
                status=ReconcileStatus.ERROR,
                salary_month=salary_month,
                message=e.message,
            ))

    counts = {s: sum(1 for r in results if r.status == s) for s in ReconcileStatus}
    logger.info(
        f"Salary reconciliation {salary_month}: "
        + ", ".join(f"{s.value}={n}" for s, n in counts.items())
    )
    return results


# ---------------------------------------------------------------------------
# Employee salary rows (manual path)
# ---------------------------------------------------------------------------

def list_employee_salaries(store: DataStore) -> List[EmployeeSalaryRecord]:
    rows = store.select("employee_salaries", order_by=["-created_at"])
    return [EmployeeSalaryRecord.from_row(r) for r in rows]


def get_employee_salary(store: DataStore, salary_id: str) -> EmployeeSalaryRecord:
    rows = store.select("employee_salaries", filters=[eq("id", salary_id)], limit=1)
    if not rows:
        raise NotFoundError("Employee salary", salary_id)
    return EmployeeSalaryRecord.from_row(rows[0])


def get_paid_employee_ids_for_month(store: DataStore, month: int, year: int) -> List[str]:
    salary_month = f"{year:04d}-{month:02d}"
    try:
        rows = store.select(
            "employee_salaries",
            columns=["employee_id"],
            filters=[eq("salary_month", salary_month), eq("paid", True)],
        )
    except DataStoreError as e:
        logger.error(f"Paid-employee lookup failed for {salary_month}: {e.message}")
        return []
    return [r["employee_id"] for r in rows]


def create_employee_salary(store: DataStore, payload: EmployeeSalaryCreate) -> EmployeeSalaryRecord:
    employee_name = payload.employee_name
    if employee_name is None:
        employee_name = (lookup(store, "employees", [payload.employee_id]).get(payload.employee_id) or {}).get("name")

    row = {
        "employee_id": payload.employee_id,
        "employee_name": employee_name,
        "salary_month": payload.salary_month,
        "gross_salary": round2(payload.gross_salary),
        "advance": round2(payload.advance),
        "net_salary": compute_net_salary(payload.gross_salary, payload.advance),
        "paid": payload.paid,
        "paid_date": payload.paid_date or (_now() if payload.paid else None),
    }
    try:
        created = store.insert("employee_salaries", [row])[0]
    except UniqueViolation:
        raise ConflictError(
            "A salary for this employee and month already exists.",
            details={"employee_id": payload.employee_id, "salary_month": payload.salary_month},
        )
    return EmployeeSalaryRecord.from_row(created)


def update_employee_salary(store: DataStore, salary_id: str, updates: EmployeeSalaryUpdate) -> EmployeeSalaryRecord:
    """Human edit path; may change paid rows. Net is always recomputed."""
    current = get_employee_salary(store, salary_id)
    patch = updates.model_dump(exclude_none=True)

    gross = round2(patch.get("gross_salary", current.gross_salary))
    advance = round2(patch.get("advance", current.advance))
    patch.update(gross_salary=gross, advance=advance, net_salary=compute_net_salary(gross, advance))
    if patch.get("paid") and not current.paid and "paid_date" not in patch:
        patch["paid_date"] = _now()

    try:
        rows = store.update("employee_salaries", patch, [eq("id", salary_id)])
    except UniqueViolation:
        raise ConflictError("A salary for this employee and month already exists.")
    if not rows:
        raise NotFoundError("Employee salary", salary_id)
    return EmployeeSalaryRecord.from_row(rows[0])


def record_employee_advance(store: DataStore, salary_id: str, amount: float) -> EmployeeSalaryRecord:
    current = get_employee_salary(store, salary_id)
    if current.paid:
        raise ConflictError("Salary already paid; advances can no longer be recorded against it.")

    advance = round2(current.advance + amount)
    net = compute_net_salary(current.gross_salary, advance)
    if net < 0:
        logger.warning(f"Advance on salary {salary_id} exceeds gross salary (net {net:.2f})")
    rows = store.update(
        "employee_salaries",
        {"advance": advance, "net_salary": net},
        [eq("id", salary_id)],
    )
    if not rows:
        raise NotFoundError("Employee salary", salary_id)
    return EmployeeSalaryRecord.from_row(rows[0])


def mark_employee_salaries_paid(
    store: DataStore, ids: Sequence[str], paid_by: Optional[str] = None
) -> BulkUpdateResult:
    if not ids:
        raise ValidationFailed("No target provided for update")
    _require_uuids(ids)

    patch = {"paid": True, "paid_date": _now()}
    if paid_by:
        patch["paid_by_employee_id"] = paid_by
    result = _mark_ids_paid(store, "employee_salaries", ids, patch)
    logger.info(f"Marked {result.updated} of {result.requested} employee salaries paid")
    return result


def _mark_ids_paid(store: DataStore, table: str, ids: Sequence[str], patch: Dict) -> BulkUpdateResult:
    """
    Mark the given rows paid. Repeated ids count once; ids with no row are
    reported as not found rather than skipped.
    """
    unique = list(dict.fromkeys(ids))
    existing = {r["id"] for r in store.select(table, columns=["id"], filters=[in_("id", unique)])}
    rows = store.update(table, patch, [in_("id", unique), eq("paid", False)])
    updated = [r["id"] for r in rows]
    return BulkUpdateResult(
        requested=len(unique),
        updated=len(updated),
        skipped=max(len(existing) - len(updated), 0),
        not_found=[i for i in unique if i not in existing],
        ids=updated,
    )


# ---------------------------------------------------------------------------
# Worker piece-rate salaries
# ---------------------------------------------------------------------------

def list_worker_salaries(store: DataStore) -> List[WorkerSalaryRecord]:
    rows = store.select("worker_salaries", order_by=["-date", "-created_at"])
    workers = lookup(store, "workers", (r.get("worker_id") for r in rows))
    products = lookup(store, "products", (r.get("product_id") for r in rows))
    operations = lookup(store, "operations", (r.get("operation_id") for r in rows), ("id", "name", "amount_per_piece"))
    return [WorkerSalaryRecord.from_row(r, workers, products, operations) for r in rows]


def add_worker_salary(store: DataStore, payload: WorkerSalaryCreate) -> WorkerSalaryRecord:
    """
    Record completed pieces for a worker. The rate defaults to the operation's
    piece rate and the total to pieces x rate unless given explicitly.
    """
    master = {}
    if payload.operation_id:
        master = lookup(
            store, "operations", [payload.operation_id], ("id", "name", "amount_per_piece", "product_id")
        ).get(payload.operation_id) or {}

    rate = payload.amount_per_piece
    if rate is None:
        rate = to_float(master.get("amount_per_piece"))
    total = payload.total_amount
    if total is None:
        total = round2(payload.pieces_done * rate)

    created = store.insert("worker_salaries", [{
        "worker_id": payload.worker_id,
        "product_id": payload.product_id or master.get("product_id"),
        "operation_id": payload.operation_id,
        "pieces_done": payload.pieces_done,
        "amount_per_piece": rate,
        "total_amount": total,
        "date": payload.date or date.today(),
        "paid": False,
        "paid_date": None,
        "created_by": payload.created_by,
    }])[0]
    return WorkerSalaryRecord.from_row(created, operations={payload.operation_id: master} if master else None)


def mark_worker_salaries_paid(
    store: DataStore,
    ids: Optional[Sequence[str]] = None,
    paid_by: Optional[str] = None,
    worker_id: Optional[str] = None,
    month: Optional[int] = None,
    year: Optional[int] = None,
) -> BulkUpdateResult:
    """Mark piece-rate rows paid, either by id list or for one worker's month."""
    patch = {"paid": True, "paid_date": _now()}
    if paid_by:
        patch["paid_by_employee_id"] = paid_by

    if ids:
        _require_uuids(ids)
        result = _mark_ids_paid(store, "worker_salaries", ids, patch)
    elif worker_id and month and year:
        _require_uuids([worker_id], label="worker ids")
        first, last, _ = month_bounds(month, year)
        filters = [eq("worker_id", worker_id), gte("date", first), lte("date", last)]
        requested = len(store.select("worker_salaries", columns=["id"], filters=filters))
        rows = store.update("worker_salaries", patch, filters + [eq("paid", False)])
        updated = [r["id"] for r in rows]
        result = BulkUpdateResult(
            requested=requested, updated=len(updated), skipped=max(requested - len(updated), 0), ids=updated
        )
    else:
        raise ValidationFailed("No target provided for update")

    logger.info(f"Marked {result.updated} worker salary row(s) paid")
    return result


def get_worker_operations(
    store: DataStore, worker_id: str, month: Optional[int] = None, year: Optional[int] = None
) -> List[WorkerOperationLine]:
    if not worker_id:
        return []
    filters = [eq("worker_id", worker_id)]
    if month and year:
        first, last, _ = month_bounds(month, year)
        filters += [gte("date", first), lte("date", last)]
    rows = store.select("worker_salaries", filters=filters, order_by=["-date"])

    products = lookup(store, "products", (r.get("product_id") for r in rows))
    operations = lookup(store, "operations", (r.get("operation_id") for r in rows), ("id", "name", "amount_per_piece"))

    lines = []
    for r in rows:
        op = operations.get(r.get("operation_id")) or {}
        pieces = int(r.get("pieces_done") or 0)
        rate = to_float(r.get("amount_per_piece")) or to_float(op.get("amount_per_piece"))
        total = r.get("total_amount")
        lines.append(WorkerOperationLine(
            id=r["id"],
            product_name=(products.get(r.get("product_id")) or {}).get("name"),
            operation_name=op.get("name"),
            date=r.get("date"),
            pieces=pieces,
            rate_per_piece=rate,
            total=to_float(total) if total is not None else round2(pieces * rate),
            paid=bool(r.get("paid")),
        ))
    return lines


def reconcile_summary(store: DataStore, reference_date: Optional[date] = None) -> ReconcileSummary:
    """Run the reconciler and count the outcomes."""
    reference_date = reference_date or date.today()
    results = reconcile_monthly_salaries(store, reference_date)
    return ReconcileSummary(
        salary_month=format_salary_month(reference_date),
        created=sum(1 for r in results if r.status == ReconcileStatus.CREATED),
        updated=sum(1 for r in results if r.status == ReconcileStatus.UPDATED),
        skipped=sum(1 for r in results if r.status == ReconcileStatus.SKIPPED),
        errors=sum(1 for r in results if r.status == ReconcileStatus.ERROR),
        incomplete_attendance=sum(1 for r in results if r.attendance_incomplete),
        results=results,
    )
