from sqlalchemy import Column, String, Float, DateTime, Boolean, Text
from sqlalchemy.sql import func
from garment_erp.database import Base
from garment_erp.models._ids import new_id


class Employee(Base):
    """Salaried staff. Supervisors are employees with role='supervisor'."""
    __tablename__ = "employees"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String, nullable=False, index=True)
    employee_code = Column(String, nullable=True, index=True)
    email = Column(String, nullable=True)
    mobile_number = Column(String, nullable=True)
    emergency_number = Column(String, nullable=True)
    current_address = Column(Text, nullable=True)
    permanent_address = Column(Text, nullable=True)
    id_proof = Column(String, nullable=True)
    id_proof_image_url = Column(String, nullable=True)
    bank_account_detail = Column(Text, nullable=True)
    bank_image_url = Column(String, nullable=True)
    profile_image_url = Column(String, nullable=True)

    # Monthly base salary used by the reconciler
    salary_amount = Column(Float, nullable=True)

    role = Column(String, default="employee", nullable=False, index=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
