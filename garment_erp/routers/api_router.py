from fastapi import APIRouter
from garment_erp.routers import (
    account, attendance, dashboard, employees, production, products,
    reports, salaries, supervisors, uploads, workers
)

# Centralized API router hub
# Routers are aggregated here, and main.py only imports this single hub.
api_router = APIRouter()

api_router.include_router(employees.router, tags=["Employees"])
api_router.include_router(workers.router, tags=["Workers"])
api_router.include_router(supervisors.router, tags=["Supervisors"])
api_router.include_router(products.router, tags=["Products"])
api_router.include_router(production.router, tags=["Production"])
api_router.include_router(attendance.router, tags=["Attendance"])
api_router.include_router(salaries.router, tags=["Salaries"])
api_router.include_router(reports.router, tags=["Reports"])
api_router.include_router(dashboard.router, tags=["Dashboard"])
api_router.include_router(account.router, tags=["Account"])
api_router.include_router(uploads.router, tags=["Uploads"])
