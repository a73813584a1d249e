from sqlalchemy import Column, String, Date, DateTime, UniqueConstraint
from sqlalchemy.sql import func
import enum
from garment_erp.database import Base
from garment_erp.models._ids import new_id


class AttendanceStatus(str, enum.Enum):
    PRESENT = "present"
    ABSENT = "absent"
    LEAVE = "leave"


class Attendance(Base):
    """One row per person per calendar day; re-marking overwrites the status."""
    __tablename__ = "attendance"
    __table_args__ = (
        UniqueConstraint("person_type", "person_id", "date", name="uq_attendance_person_day"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    person_type = Column(String, default="employee", nullable=False)
    person_id = Column(String(36), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    status = Column(String, nullable=False)
    shift = Column(String, nullable=True)
    marked_by_employee_id = Column(String(36), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
