from typing import List, Optional

from pydantic import BaseModel, Field


class OperationIn(BaseModel):
    id: Optional[str] = None
    name: str = Field(..., min_length=1)
    operation_code: Optional[str] = None
    amount_per_piece: float = Field(0.0, ge=0)
    entered_by: Optional[str] = None


class ProductCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    product_code: Optional[str] = None
    design_no: Optional[str] = None
    color: Optional[str] = None
    pattern_image_url: Optional[str] = None
    material_cost: float = Field(0.0, ge=0)
    thread_cost: float = Field(0.0, ge=0)
    other_costs: float = Field(0.0, ge=0)
    unit: Optional[str] = None
    created_by: Optional[str] = None
    operations: List[OperationIn] = Field(default_factory=list)


class ProductUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    product_code: Optional[str] = None
    design_no: Optional[str] = None
    color: Optional[str] = None
    pattern_image_url: Optional[str] = None
    material_cost: Optional[float] = Field(None, ge=0)
    thread_cost: Optional[float] = Field(None, ge=0)
    other_costs: Optional[float] = Field(None, ge=0)
    unit: Optional[str] = None
    # None leaves operations untouched; a list replaces them
    operations: Optional[List[OperationIn]] = None
