"""
Login accounts. A user is optionally tied to an employee row
(supervisors log in with the account created for their employee record).
"""
from sqlalchemy import Column, String, Enum, DateTime, Boolean, ForeignKey
from sqlalchemy.sql import func
import enum
from garment_erp.database import Base
from garment_erp.models._ids import new_id


class UserRole(str, enum.Enum):
    ADMIN = "admin"
    SUPERVISOR = "supervisor"


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    employee_id = Column(String(36), ForeignKey("employees.id", ondelete="SET NULL"), nullable=True, index=True)
    role = Column(Enum(UserRole, values_callable=lambda e: [m.value for m in e]), default=UserRole.SUPERVISOR, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    def __repr__(self):
        return f"<User {self.email} ({self.role})>"
