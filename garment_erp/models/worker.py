from sqlalchemy import Column, String, DateTime, Boolean, Text
from sqlalchemy.sql import func
from garment_erp.database import Base
from garment_erp.models._ids import new_id


class Worker(Base):
    """Piece-rate production worker, paid per completed operation piece."""
    __tablename__ = "workers"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String, nullable=False, index=True)
    worker_code = Column(String, nullable=True, index=True)
    mobile_number = Column(String, nullable=True)
    address = Column(Text, nullable=True)
    id_proof = Column(String, nullable=True)
    profile_image_url = Column(String, nullable=True)
    id_proof_image_url = Column(String, nullable=True)
    bank_image_url = Column(String, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
