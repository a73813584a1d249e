from typing import Optional

from pydantic import BaseModel, Field


class EmployeeBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    employee_code: Optional[str] = None
    email: Optional[str] = None
    mobile_number: Optional[str] = None
    emergency_number: Optional[str] = None
    current_address: Optional[str] = None
    permanent_address: Optional[str] = None
    id_proof: Optional[str] = None
    id_proof_image_url: Optional[str] = None
    bank_account_detail: Optional[str] = None
    bank_image_url: Optional[str] = None
    profile_image_url: Optional[str] = None
    salary_amount: Optional[float] = Field(None, ge=0)
    is_active: bool = True


class EmployeeCreate(EmployeeBase):
    pass


class EmployeeUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    employee_code: Optional[str] = None
    email: Optional[str] = None
    mobile_number: Optional[str] = None
    emergency_number: Optional[str] = None
    current_address: Optional[str] = None
    permanent_address: Optional[str] = None
    id_proof: Optional[str] = None
    id_proof_image_url: Optional[str] = None
    bank_account_detail: Optional[str] = None
    bank_image_url: Optional[str] = None
    profile_image_url: Optional[str] = None
    salary_amount: Optional[float] = Field(None, ge=0)
    is_active: Optional[bool] = None


class WorkerCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    worker_code: Optional[str] = None
    mobile_number: Optional[str] = None
    address: Optional[str] = None
    id_proof: Optional[str] = None
    profile_image_url: Optional[str] = None
    id_proof_image_url: Optional[str] = None
    bank_image_url: Optional[str] = None
    is_active: bool = True


class WorkerUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    worker_code: Optional[str] = None
    mobile_number: Optional[str] = None
    address: Optional[str] = None
    id_proof: Optional[str] = None
    profile_image_url: Optional[str] = None
    id_proof_image_url: Optional[str] = None
    bank_image_url: Optional[str] = None
    is_active: Optional[bool] = None


class SupervisorCreate(EmployeeBase):
    """A supervisor is an employee; a login is created when a password is given."""
    password: Optional[str] = Field(None, min_length=8)


class SupervisorUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    email: Optional[str] = None


class ChangePasswordRequest(BaseModel):
    user_id: str
    current_password: str
    new_password: str = Field(..., min_length=8)


class UploadResult(BaseModel):
    url: Optional[str] = None
