"""
Reports Router

Production, operation and worker reports bucketed by period relative to a
reference date (today by default).
"""
import datetime as dt
from typing import List, Optional

from fastapi import APIRouter, Depends

from garment_erp.data.store import DataStore
from garment_erp.dependencies import get_store
from garment_erp.schemas.production import ProductionRow
from garment_erp.schemas.report import OperationExpense, OperationWiseRow, ProductionReport, WorkerAggregate
from garment_erp.services import report_service
from garment_erp.services.period_filter import Period
from garment_erp.services.records import get_row

router = APIRouter(prefix="/reports", tags=["reports"])


def _production_context(store: DataStore, production_id: str):
    production = get_row(store, "production", "Production", production_id)
    records = report_service.fetch_production_operations(store, production_id)
    return records, report_service.product_cost_per_piece(store, production.get("product_id"))


@router.get("/productions", response_model=List[ProductionRow])
def list_productions(store: DataStore = Depends(get_store)):
    return report_service.fetch_productions(store)


@router.get("/productions/{production_id}", response_model=ProductionReport)
def production_report(
    production_id: str,
    period: Period = Period.MONTHLY,
    reference: Optional[dt.date] = None,
    store: DataStore = Depends(get_store),
):
    records, cost_per_piece = _production_context(store, production_id)
    return report_service.production_report(records, period, reference, cost_per_piece)


@router.get("/productions/{production_id}/custom", response_model=ProductionReport)
def custom_report(
    production_id: str,
    start: Optional[dt.date] = None,
    end: Optional[dt.date] = None,
    store: DataStore = Depends(get_store),
):
    """Inclusive ``start``..``end`` range; a missing bound returns an empty report."""
    records, cost_per_piece = _production_context(store, production_id)
    return report_service.custom_report(records, start, end, cost_per_piece)


@router.get("/productions/{production_id}/operations", response_model=List[OperationExpense])
def operations_chart(
    production_id: str,
    period: Period = Period.MONTHLY,
    reference: Optional[dt.date] = None,
    store: DataStore = Depends(get_store),
):
    records = report_service.fetch_production_operations(store, production_id)
    return report_service.operations_chart(records, period, reference)


@router.get("/workers", response_model=List[WorkerAggregate])
def worker_performance(
    period: Period = Period.MONTHLY,
    reference: Optional[dt.date] = None,
    store: DataStore = Depends(get_store),
):
    records = report_service.fetch_worker_salaries(store)
    return report_service.worker_performance(records, period, reference)


@router.get("/operation-wise", response_model=List[OperationWiseRow])
def operation_wise_report(store: DataStore = Depends(get_store)):
    return report_service.fetch_operation_wise_report(store)
