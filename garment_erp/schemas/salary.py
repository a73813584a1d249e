import datetime as dt
import enum
import re
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from garment_erp.schemas.common import to_date, to_datetime, to_float, to_int

_MONTH_RE = re.compile(r"^(\d{4})-(\d{2})(?:-(\d{2}))?")


def format_salary_month(value: Any) -> str:
    """Normalise a date, datetime or 'YYYY-MM[-DD]' string to 'YYYY-MM'."""
    if isinstance(value, (dt.date, dt.datetime)):
        return f"{value.year:04d}-{value.month:02d}"
    match = _MONTH_RE.match(str(value or "").strip())
    if not match or not 1 <= int(match.group(2)) <= 12:
        raise ValueError(f"Unrecognised salary month: {value!r}")
    return f"{match.group(1)}-{match.group(2)}"


def parse_salary_month(value: Any) -> Optional[dt.date]:
    try:
        month = format_salary_month(value)
    except ValueError:
        return None
    year, mon = month.split("-")
    return dt.date(int(year), int(mon), 1)


class EmployeeSalaryRecord(BaseModel):
    id: str
    employee_id: str
    employee_name: Optional[str] = None
    salary_month: str
    month: Optional[dt.date] = None
    gross_salary: float = 0.0
    advance: float = 0.0
    net_salary: float = 0.0
    paid: bool = False
    paid_date: Optional[dt.datetime] = None
    paid_by: Optional[str] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "EmployeeSalaryRecord":
        month = parse_salary_month(row.get("salary_month"))
        if month is None:
            month = to_date(row.get("created_at"))
        return cls(
            id=row["id"],
            employee_id=str(row.get("employee_id")),
            employee_name=row.get("employee_name"),
            salary_month=str(row.get("salary_month") or ""),
            month=month,
            gross_salary=to_float(row.get("gross_salary")),
            advance=to_float(row.get("advance")),
            net_salary=to_float(row.get("net_salary")),
            paid=bool(row.get("paid")),
            paid_date=to_datetime(row.get("paid_date")),
            paid_by=row.get("paid_by_employee_id"),
        )


class WorkerSalaryRecord(BaseModel):
    id: str
    worker_id: Optional[str] = None
    worker_name: Optional[str] = None
    product_id: Optional[str] = None
    product_name: Optional[str] = None
    operation_id: Optional[str] = None
    operation_name: Optional[str] = None
    date: Optional[dt.date] = None
    pieces_done: int = 0
    amount_per_piece: float = 0.0
    total_amount: float = 0.0
    paid: bool = False
    paid_date: Optional[dt.datetime] = None
    paid_by: Optional[str] = None

    @property
    def cost(self) -> float:
        return self.total_amount

    @classmethod
    def from_row(
        cls,
        row: Dict[str, Any],
        workers: Optional[Dict[str, Any]] = None,
        products: Optional[Dict[str, Any]] = None,
        operations: Optional[Dict[str, Any]] = None,
    ) -> "WorkerSalaryRecord":
        workers, products, operations = workers or {}, products or {}, operations or {}
        worker_id = row.get("worker_id")
        product_id = row.get("product_id")
        operation_id = row.get("operation_id")
        return cls(
            id=row["id"],
            worker_id=worker_id,
            worker_name=row.get("worker_name") or (workers.get(worker_id) or {}).get("name"),
            product_id=product_id,
            product_name=row.get("product_name") or (products.get(product_id) or {}).get("name"),
            operation_id=operation_id,
            operation_name=row.get("operation_name") or (operations.get(operation_id) or {}).get("name"),
            date=to_date(row.get("date")),
            pieces_done=to_int(row.get("pieces_done")),
            amount_per_piece=to_float(row.get("amount_per_piece")),
            total_amount=to_float(row.get("total_amount")),
            paid=bool(row.get("paid")),
            paid_date=to_datetime(row.get("paid_date")),
            paid_by=row.get("paid_by_employee_id"),
        )


class ReconcileStatus(str, enum.Enum):
    CREATED = "created"
    UPDATED = "updated"
    SKIPPED = "skipped"
    ERROR = "error"


class ReconcileResult(BaseModel):
    employee_id: str
    employee_name: Optional[str] = None
    status: ReconcileStatus
    salary_month: str
    salary_id: Optional[str] = None
    gross_salary: Optional[float] = None
    advance: Optional[float] = None
    net_salary: Optional[float] = None
    present_days: Optional[int] = None
    leave_days: Optional[int] = None
    absent_days: Optional[int] = None
    attendance_incomplete: bool = False
    message: Optional[str] = None


class ReconcileRequest(BaseModel):
    reference_date: Optional[dt.date] = None


class ReconcileSummary(BaseModel):
    salary_month: str
    created: int = 0
    updated: int = 0
    skipped: int = 0
    errors: int = 0
    incomplete_attendance: int = 0
    results: List[ReconcileResult] = Field(default_factory=list)


class EmployeeSalaryCreate(BaseModel):
    employee_id: str
    salary_month: str
    gross_salary: float = Field(0.0, ge=0)
    advance: float = Field(0.0, ge=0)
    paid: bool = False
    paid_date: Optional[dt.datetime] = None
    employee_name: Optional[str] = None

    @field_validator("salary_month", mode="before")
    @classmethod
    def _month(cls, v):
        return format_salary_month(v)


class EmployeeSalaryUpdate(BaseModel):
    salary_month: Optional[str] = None
    gross_salary: Optional[float] = Field(None, ge=0)
    advance: Optional[float] = Field(None, ge=0)
    paid: Optional[bool] = None
    paid_date: Optional[dt.datetime] = None
    employee_name: Optional[str] = None

    @field_validator("salary_month", mode="before")
    @classmethod
    def _month(cls, v):
        return format_salary_month(v) if v is not None else None


class AdvanceRequest(BaseModel):
    amount: float = Field(..., gt=0)


class MarkPaidRequest(BaseModel):
    ids: List[str] = Field(default_factory=list)
    paid_by: Optional[str] = None


class MarkWorkerPaidRequest(MarkPaidRequest):
    worker_id: Optional[str] = None
    month: Optional[int] = Field(None, ge=1, le=12)
    year: Optional[int] = None


class BulkUpdateResult(BaseModel):
    requested: int
    updated: int
    skipped: int = 0
    not_found: List[str] = Field(default_factory=list)
    ids: List[str] = Field(default_factory=list)


class WorkerSalaryCreate(BaseModel):
    worker_id: str
    product_id: Optional[str] = None
    operation_id: Optional[str] = None
    pieces_done: int = Field(0, ge=0)
    amount_per_piece: Optional[float] = Field(None, ge=0)
    total_amount: Optional[float] = Field(None, ge=0)
    date: Optional[dt.date] = None
    created_by: Optional[str] = None


class WorkerOperationLine(BaseModel):
    id: str
    product_name: Optional[str] = None
    operation_name: Optional[str] = None
    date: Optional[dt.date] = None
    pieces: int
    rate_per_piece: float
    total: float
    paid: bool = False
