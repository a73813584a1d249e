import datetime as dt
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from garment_erp.schemas.common import to_date, to_datetime, to_float, to_int


class ProductionOperationRecord(BaseModel):
    id: Optional[str] = None
    production_id: Optional[str] = None
    operation_id: Optional[str] = None
    operation_name: Optional[str] = None
    amount_per_piece: float = 0.0
    worker_id: Optional[str] = None
    worker_name: Optional[str] = None
    pieces_done: int = 0
    earnings: float = 0.0
    date: Optional[dt.date] = None

    @property
    def cost(self) -> float:
        return self.earnings

    @classmethod
    def from_row(cls, row: Dict[str, Any], operations: Optional[Dict[str, Any]] = None) -> "ProductionOperationRecord":
        master = (operations or {}).get(row.get("operation_id")) or {}
        return cls(
            id=row.get("id"),
            production_id=row.get("production_id"),
            operation_id=row.get("operation_id"),
            operation_name=row.get("operation_name") or master.get("name"),
            amount_per_piece=to_float(master.get("amount_per_piece")),
            worker_id=row.get("worker_id"),
            worker_name=row.get("worker_name"),
            pieces_done=to_int(row.get("pieces_done")),
            earnings=to_float(row.get("earnings")),
            date=to_date(row.get("date")),
        )


class ProductionCreate(BaseModel):
    product_id: str
    production_code: Optional[str] = None
    po_number: Optional[str] = None
    color: Optional[str] = None
    total_fabric: float = Field(0.0, ge=0)
    average: float = Field(0.0, ge=0)
    total_quantity: int = Field(0, ge=0)
    created_by: Optional[str] = None


class ProductionUpdate(BaseModel):
    production_code: Optional[str] = None
    po_number: Optional[str] = None
    color: Optional[str] = None
    total_fabric: Optional[float] = Field(None, ge=0)
    average: Optional[float] = Field(None, ge=0)
    total_quantity: Optional[int] = Field(None, ge=0)
    status: Optional[Literal["pending", "in_progress", "completed"]] = None


class AssignWorkerRequest(BaseModel):
    worker_id: Optional[str] = None
    worker_name: Optional[str] = None
    pieces_done: Optional[int] = Field(None, ge=0)


class ProductionOperationCreate(BaseModel):
    operation_id: str
    worker_id: Optional[str] = None
    worker_name: Optional[str] = None
    pieces_done: int = Field(0, ge=0)
    date: Optional[dt.date] = None
    supervisor_employee_id: Optional[str] = None


class ProductionCreateResult(BaseModel):
    production: Dict[str, Any]
    operations_created: int = 0
    operations_error: Optional[str] = None


class ProductionDetail(BaseModel):
    production: Dict[str, Any]
    product_name: Optional[str] = None
    operations: List[ProductionOperationRecord] = Field(default_factory=list)
    finished_pieces: int = 0


class ProductionRow(BaseModel):
    id: str
    product_id: Optional[str] = None
    product_name: str = "Unknown Product"
    production_code: Optional[str] = None
    po_number: Optional[str] = None
    color: Optional[str] = None
    total_quantity: int = 0
    total_fabric: float = 0.0
    average: float = 0.0
    status: Optional[str] = None
    created_by: Optional[str] = None
    created_at: Optional[dt.datetime] = None
    operation_count: Optional[int] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any], products: Optional[Dict[str, Any]] = None) -> "ProductionRow":
        product = (products or {}).get(row.get("product_id")) or {}
        return cls(
            id=row["id"],
            product_id=row.get("product_id"),
            product_name=product.get("name") or "Unknown Product",
            production_code=row.get("production_code"),
            po_number=row.get("po_number"),
            color=row.get("color"),
            total_quantity=to_int(row.get("total_quantity")),
            total_fabric=to_float(row.get("total_fabric")),
            average=to_float(row.get("average")),
            status=row.get("status"),
            created_by=row.get("created_by"),
            created_at=to_datetime(row.get("created_at")),
        )
