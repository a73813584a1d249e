"""
Server-side procedures reachable through ``DataStore.rpc``.

These mirror the two stored procedures the factory database exposes:
account creation tied to an employee row, and verified password change.
"""
import logging
from typing import Any, Dict

from sqlalchemy.orm import Session

from garment_erp.core.exceptions import ConflictError, NotFoundError, ValidationFailed
from garment_erp.core.security import get_password_hash, verify_password
from garment_erp.models.employee import Employee
from garment_erp.models.user import User, UserRole

logger = logging.getLogger(__name__)

PASSWORD_SUCCESS = "SUCCESS"
PASSWORD_INVALID = "INVALID_PASSWORD"
PASSWORD_USER_NOT_FOUND = "USER_NOT_FOUND"

MIN_PASSWORD_LENGTH = 8


def create_employee_user(db: Session, args: Dict[str, Any]) -> Dict[str, Any]:
    employee_id = args.get("employee_id")
    email = (args.get("email") or "").strip().lower()
    password = args.get("password") or ""
    role = UserRole(args.get("role") or UserRole.SUPERVISOR.value)

    if not email or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationFailed(
            f"Email and a password of at least {MIN_PASSWORD_LENGTH} characters are required"
        )

    employee = db.get(Employee, employee_id) if employee_id else None
    if employee is None:
        raise NotFoundError("Employee", employee_id)

    if db.query(User).filter(User.email == email).first():
        raise ConflictError(f"A login for {email} already exists")

    user = User(
        email=email,
        hashed_password=get_password_hash(password),
        employee_id=employee.id,
        role=role,
        is_active=True,
    )
    db.add(user)
    try:
        db.commit()
        db.refresh(user)
    except Exception:
        db.rollback()
        raise

    logger.info(f"Created {role.value} login for employee {employee.id}")
    return {"user_id": user.id, "email": user.email, "employee_id": employee.id, "role": role.value}


def change_user_password(db: Session, args: Dict[str, Any]) -> str:
    user = db.get(User, args.get("user_id")) if args.get("user_id") else None
    if user is None:
        return PASSWORD_USER_NOT_FOUND

    if not verify_password(args.get("current_password") or "", user.hashed_password):
        logger.warning(f"Rejected password change for user {user.id}: current password mismatch")
        return PASSWORD_INVALID

    new_password = args.get("new_password") or ""
    if len(new_password) < MIN_PASSWORD_LENGTH:
        raise ValidationFailed(f"New password must be at least {MIN_PASSWORD_LENGTH} characters")

    user.hashed_password = get_password_hash(new_password)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    return PASSWORD_SUCCESS


PROCEDURES = {
    "create_employee_user": create_employee_user,
    "change_user_password": change_user_password,
}
