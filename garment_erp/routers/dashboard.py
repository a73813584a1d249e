from fastapi import APIRouter, Depends

from garment_erp.data.store import DataStore
from garment_erp.dependencies import get_store
from garment_erp.schemas.report import DashboardData
from garment_erp.services import dashboard_service

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardData)
def get_dashboard(store: DataStore = Depends(get_store)):
    return dashboard_service.get_dashboard_data(store)
