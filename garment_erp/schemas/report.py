import datetime as dt
from typing import List, Optional

from pydantic import BaseModel, Field


class WorkerAggregate(BaseModel):
    worker_id: str
    worker_name: Optional[str] = None
    total_pieces: int = 0
    total_amount: float = 0.0
    operations: int = 0
    paid: bool = True
    efficiency: int = 0


class OperationExpense(BaseModel):
    name: str
    cost: float = 0.0
    pieces: int = 0


class ProductionReport(BaseModel):
    production_quantity: int = 0
    operation_expense: float = 0.0
    raw_material_cost: float = 0.0
    total_expense: float = 0.0
    efficiency: int = 0


class OperationWiseRow(BaseModel):
    id: str
    product_name: str
    po_number: str
    operation_name: str
    worker_name: Optional[str] = None
    date: Optional[dt.date] = None
    quantity: int = 0
    rate: float = 0.0
    total: float = 0.0
    product_id: Optional[str] = None
    operation_id: Optional[str] = None
    worker_id: Optional[str] = None


class ProductionProgressItem(BaseModel):
    id: str
    product_name: str
    po_number: str
    progress: int
    total_quantity: int = 0
    completed_pieces: int = 0


class RecentOperationItem(BaseModel):
    id: str
    worker_id: Optional[str] = None
    worker_name: Optional[str] = None
    operation_id: Optional[str] = None
    operation_name: Optional[str] = None
    product_id: Optional[str] = None
    product_name: Optional[str] = None
    pieces: int = 0
    earnings: float = 0.0
    date: Optional[dt.date] = None


class WorkerCounts(BaseModel):
    total: int = 0
    active: int = 0


class DashboardData(BaseModel):
    workers: WorkerCounts = Field(default_factory=WorkerCounts)
    active_products: int = 0
    todays_production: int = 0
    pending_payments: float = 0.0
    workers_ops_today: int = 0
    production_progress: List[ProductionProgressItem] = Field(default_factory=list)
    recent_worker_ops: List[RecentOperationItem] = Field(default_factory=list)
