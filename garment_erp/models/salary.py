from sqlalchemy import Column, String, Float, Integer, Boolean, Date, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func
from garment_erp.database import Base
from garment_erp.models._ids import new_id


class EmployeeSalary(Base):
    __tablename__ = "employee_salaries"
    __table_args__ = (
        UniqueConstraint("employee_id", "salary_month", name="uq_employee_salary_month"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    employee_id = Column(String(36), ForeignKey("employees.id", ondelete="CASCADE"), nullable=False, index=True)
    employee_name = Column(String, nullable=True)
    salary_month = Column(String(7), nullable=False)  # YYYY-MM
    gross_salary = Column(Float, default=0.0, nullable=False)
    advance = Column(Float, default=0.0, nullable=False)
    net_salary = Column(Float, default=0.0, nullable=False)
    paid = Column(Boolean, default=False, nullable=False)
    paid_date = Column(DateTime(timezone=True), nullable=True)
    paid_by_employee_id = Column(String(36), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class WorkerSalary(Base):
    """A single piece-rate transaction: pieces of one operation done by a worker on a day."""
    __tablename__ = "worker_salaries"

    id = Column(String(36), primary_key=True, default=new_id)
    worker_id = Column(String(36), ForeignKey("workers.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(String(36), ForeignKey("products.id"), nullable=True)
    operation_id = Column(String(36), ForeignKey("operations.id"), nullable=True)
    date = Column(Date, nullable=False, index=True)
    pieces_done = Column(Integer, default=0, nullable=False)
    amount_per_piece = Column(Float, default=0.0, nullable=False)
    total_amount = Column(Float, default=0.0, nullable=False)
    paid = Column(Boolean, default=False, nullable=False)
    paid_date = Column(DateTime(timezone=True), nullable=True)
    paid_by_employee_id = Column(String(36), nullable=True)
    created_by = Column(String(36), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
