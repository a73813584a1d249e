from sqlalchemy import Column, String, Float, DateTime, Boolean, ForeignKey
from sqlalchemy.sql import func
from garment_erp.database import Base
from garment_erp.models._ids import new_id


class Product(Base):
    __tablename__ = "products"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String, nullable=False, index=True)
    product_code = Column(String, nullable=True, index=True)
    design_no = Column(String, nullable=True)
    color = Column(String, nullable=True)
    pattern_image_url = Column(String, nullable=True)
    material_cost = Column(Float, default=0.0)
    thread_cost = Column(Float, default=0.0)
    other_costs = Column(Float, default=0.0)
    unit = Column(String, nullable=True)
    created_by = Column(String(36), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class Operation(Base):
    """Operation master: one sewing/finishing step of a product with its piece rate."""
    __tablename__ = "operations"

    id = Column(String(36), primary_key=True, default=new_id)
    product_id = Column(String(36), ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)
    operation_code = Column(String, nullable=True)
    amount_per_piece = Column(Float, default=0.0, nullable=False)
    entered_by = Column(String(36), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
