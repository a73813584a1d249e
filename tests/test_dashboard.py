from datetime import date

from garment_erp.schemas.production import ProductionCreate, ProductionOperationCreate, ProductionUpdate
from garment_erp.schemas.report import DashboardData
from garment_erp.schemas.salary import WorkerSalaryCreate
from garment_erp.services import production_service, salary_service
from garment_erp.services.dashboard_service import get_dashboard_data


def test_dashboard_tiles(store, make_worker, make_product):
    ravi = make_worker("Ravi")
    make_worker("Idle", is_active=False)
    product, (collar, hem) = make_product("Polo", operations=[("Collar", 2.0), ("Hem", 1.0)])
    make_product("Retired", is_active=False)

    created = production_service.create_production(
        store, ProductionCreate(product_id=product["id"], po_number="PO-9", total_quantity=10)
    )
    production_service.insert_production_operation(
        store, created.production["id"], ProductionOperationCreate(operation_id=collar["id"], pieces_done=5)
    )
    done = production_service.create_production(store, ProductionCreate(product_id=product["id"]))
    production_service.update_production(store, done.production["id"], ProductionUpdate(status="completed"))

    salary_service.add_worker_salary(
        store, WorkerSalaryCreate(worker_id=ravi["id"], operation_id=collar["id"], pieces_done=4)
    )
    paid = salary_service.add_worker_salary(
        store, WorkerSalaryCreate(worker_id=ravi["id"], operation_id=hem["id"], pieces_done=100)
    )
    salary_service.mark_worker_salaries_paid(store, ids=[paid.id])

    data = get_dashboard_data(store, today=date.today())

    assert (data.workers.total, data.workers.active) == (2, 1)
    assert data.active_products == 1
    assert data.todays_production == 5
    assert data.workers_ops_today == 5
    assert data.pending_payments == 8.0

    [progress] = data.production_progress
    assert progress.po_number == "PO-9"
    assert progress.progress == 25
    assert progress.completed_pieces == 5

    assert len(data.recent_worker_ops) == 2
    assert {r.worker_name for r in data.recent_worker_ops} == {"Ravi"}
    assert {r.operation_name for r in data.recent_worker_ops} == {"Collar", "Hem"}


def test_empty_dashboard(store):
    data = get_dashboard_data(store)
    assert data == DashboardData()


def test_dashboard_survives_store_outage(failing_store):
    assert get_dashboard_data(failing_store) == DashboardData()
