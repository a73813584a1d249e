import datetime as dt
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from garment_erp.schemas.common import to_date

AttendanceStatusValue = Literal["present", "absent", "leave"]
PersonType = Literal["employee", "worker"]


class AttendanceRecord(BaseModel):
    id: Optional[str] = None
    person_type: str = "employee"
    person_id: str
    date: Optional[dt.date] = None
    status: str
    shift: Optional[str] = None
    marked_by_employee_id: Optional[str] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "AttendanceRecord":
        return cls(
            id=row.get("id"),
            person_type=row.get("person_type") or "employee",
            person_id=str(row.get("person_id")),
            date=to_date(row.get("date")),
            status=str(row.get("status") or "").lower(),
            shift=row.get("shift"),
            marked_by_employee_id=row.get("marked_by_employee_id"),
        )


class AttendanceSummary(BaseModel):
    total_days: int
    present: int = 0
    absent: int = 0
    leave: int = 0
    percentage: float = 0.0

    @property
    def recorded_days(self) -> int:
        return self.present + self.absent + self.leave


class AttendanceRowIn(BaseModel):
    person_type: PersonType = "employee"
    person_id: str
    date: dt.date
    status: AttendanceStatusValue
    shift: Optional[str] = None
    marked_by_employee_id: Optional[str] = None


class MarkAttendanceRequest(BaseModel):
    date: dt.date
    statuses: Dict[str, AttendanceStatusValue] = Field(default_factory=dict)
    marked_by_employee_id: Optional[str] = None


class BulkAttendanceRequest(BaseModel):
    rows: List[AttendanceRowIn]


class MarkAttendanceResult(BaseModel):
    saved: int
    skipped_paid: List[str] = Field(default_factory=list)

