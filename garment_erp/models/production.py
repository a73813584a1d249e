from sqlalchemy import Column, String, Float, Integer, Date, DateTime, ForeignKey
from sqlalchemy.sql import func
import enum
from garment_erp.database import Base
from garment_erp.models._ids import new_id


class ProductionStatus(str, enum.Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class Production(Base):
    """A production order (PO) for a product with a target quantity."""
    __tablename__ = "production"

    id = Column(String(36), primary_key=True, default=new_id)
    product_id = Column(String(36), ForeignKey("products.id"), nullable=False, index=True)
    production_code = Column(String, nullable=True, index=True)
    po_number = Column(String, nullable=True, index=True)
    color = Column(String, nullable=True)
    total_fabric = Column(Float, default=0.0)
    average = Column(Float, default=0.0)
    total_quantity = Column(Integer, default=0, nullable=False)
    status = Column(String, default=ProductionStatus.PENDING.value, nullable=False)
    created_by = Column(String(36), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class ProductionOperation(Base):
    __tablename__ = "production_operation"

    id = Column(String(36), primary_key=True, default=new_id)
    production_id = Column(String(36), ForeignKey("production.id", ondelete="CASCADE"), nullable=False, index=True)
    operation_id = Column(String(36), ForeignKey("operations.id"), nullable=True, index=True)
    worker_id = Column(String(36), ForeignKey("workers.id", ondelete="SET NULL"), nullable=True)
    worker_name = Column(String, nullable=True)
    pieces_done = Column(Integer, default=0, nullable=False)
    earnings = Column(Float, default=0.0, nullable=False)
    date = Column(Date, nullable=True)
    supervisor_employee_id = Column(String(36), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
