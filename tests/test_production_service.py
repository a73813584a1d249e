from datetime import date

import pytest

from garment_erp.core.exceptions import DataStoreError, NotFoundError
from garment_erp.data.sql_store import SqlAlchemyStore
from garment_erp.data.store import eq
from garment_erp.schemas.production import (
    AssignWorkerRequest,
    ProductionCreate,
    ProductionOperationCreate,
    ProductionUpdate,
)
from garment_erp.services import production_service


@pytest.fixture
def polo(make_product):
    return make_product("Polo", operations=[("Collar", 2.5), ("Sleeve", 1.5), ("Hem", 1.0)])


@pytest.fixture
def created(store, polo):
    product, _ = polo
    return production_service.create_production(
        store, ProductionCreate(product_id=product["id"], po_number="PO-7", total_quantity=100)
    )


def test_create_copies_product_operations(store, created, polo):
    _, ops = polo
    assert created.operations_created == 3
    assert created.operations_error is None

    rows = store.select("production_operation", filters=[eq("production_id", created.production["id"])])
    assert {r["operation_id"] for r in rows} == {op["id"] for op in ops}
    assert all(r["pieces_done"] == 0 and r["earnings"] == 0 for r in rows)
    assert all(r["worker_id"] is None and r["date"] == date.today() for r in rows)


def test_create_unknown_product(store):
    with pytest.raises(NotFoundError):
        production_service.create_production(store, ProductionCreate(product_id="missing"))


class OperationCopyFailureStore(SqlAlchemyStore):
    def insert(self, table, rows):
        if table == "production_operation":
            raise DataStoreError("copy failed", table=table)
        return super().insert(table, rows)


def test_operation_copy_is_best_effort(db_session, polo):
    product, _ = polo
    store = OperationCopyFailureStore(db_session)

    result = production_service.create_production(store, ProductionCreate(product_id=product["id"]))

    assert result.operations_error == "copy failed"
    assert result.operations_created == 0
    assert store.select("production", filters=[eq("id", result.production["id"])])


def test_product_without_operations(store, make_product):
    product, _ = make_product("Plain")
    result = production_service.create_production(store, ProductionCreate(product_id=product["id"]))
    assert result.operations_created == 0
    assert result.operations_error is None


def test_list_productions_counts_operations(store, created, make_product):
    other, _ = make_product("Tee")
    production_service.create_production(store, ProductionCreate(product_id=other["id"]))

    rows = {r.product_name: r for r in production_service.list_productions(store)}

    assert rows["Polo"].operation_count == 3
    assert rows["Polo"].po_number == "PO-7"
    assert rows["Tee"].operation_count == 0


def test_assign_worker_recomputes_earnings(store, created, make_worker):
    worker = make_worker("Ravi")
    detail = production_service.get_production(store, created.production["id"])
    collar = next(op for op in detail.operations if op.operation_name == "Collar")

    record = production_service.assign_worker_to_operation(
        store,
        created.production["id"],
        collar.id,
        AssignWorkerRequest(worker_id=worker["id"], worker_name="Ravi", pieces_done=30),
    )

    assert record.worker_id == worker["id"]
    assert record.pieces_done == 30
    assert record.earnings == 75.0


def test_assign_worker_without_pieces_keeps_earnings(store, created):
    detail = production_service.get_production(store, created.production["id"])
    hem = next(op for op in detail.operations if op.operation_name == "Hem")
    production_service.assign_worker_to_operation(store, created.production["id"], hem.id, AssignWorkerRequest(pieces_done=12))

    record = production_service.assign_worker_to_operation(
        store, created.production["id"], hem.id, AssignWorkerRequest(worker_name="Mina")
    )

    assert record.worker_name == "Mina"
    assert record.pieces_done == 12
    assert record.earnings == 12.0


def test_assign_rejects_row_of_other_production(store, created, polo):
    product, _ = polo
    other = production_service.create_production(store, ProductionCreate(product_id=product["id"]))
    row = store.select("production_operation", filters=[eq("production_id", other.production["id"])], limit=1)[0]

    with pytest.raises(NotFoundError):
        production_service.assign_worker_to_operation(
            store, created.production["id"], row["id"], AssignWorkerRequest(pieces_done=1)
        )


def test_finished_pieces_is_the_slowest_operation(store, created, polo):
    _, (collar, sleeve, hem) = polo
    production_id = created.production["id"]
    for op, pieces in ((collar, 40), (sleeve, 25), (hem, 10), (hem, 20)):
        production_service.insert_production_operation(
            store, production_id, ProductionOperationCreate(operation_id=op["id"], pieces_done=pieces)
        )

    assert production_service.finished_pieces(store, production_id) == 25
    assert production_service.get_production(store, production_id).finished_pieces == 25


def test_insert_operation_row_prices_pieces(store, created, polo):
    _, (collar, _, _) = polo
    record = production_service.insert_production_operation(
        store,
        created.production["id"],
        ProductionOperationCreate(operation_id=collar["id"], pieces_done=8, date=date(2024, 4, 2)),
    )
    assert record.earnings == 20.0
    assert record.operation_name == "Collar"
    assert record.date == date(2024, 4, 2)


def test_delete_operation_row(store, created):
    row = store.select("production_operation", filters=[eq("production_id", created.production["id"])], limit=1)[0]
    assert production_service.delete_production_operation(store, row["id"]) is True
    with pytest.raises(NotFoundError):
        production_service.delete_production_operation(store, row["id"])


def test_update_production_status(store, created):
    updated = production_service.update_production(
        store, created.production["id"], ProductionUpdate(status="completed")
    )
    assert updated["status"] == "completed"
    assert updated["po_number"] == "PO-7"
