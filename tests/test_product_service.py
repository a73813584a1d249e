import pytest

from garment_erp.core.exceptions import NotFoundError
from garment_erp.schemas.product import OperationIn, ProductCreate, ProductUpdate
from garment_erp.services import product_service


@pytest.fixture
def product(store):
    return product_service.create_product(store, ProductCreate(
        name="Kurta",
        material_cost=120,
        operations=[
            OperationIn(name="Cutting", amount_per_piece=3),
            OperationIn(name="Stitching", amount_per_piece=8),
        ],
    ))


def test_create_product_with_operations(product):
    assert product["name"] == "Kurta"
    assert product["is_active"] is True
    assert sorted(op["name"] for op in product["operations"]) == ["Cutting", "Stitching"]


def test_update_replaces_operations(store, product):
    cutting = next(op for op in product["operations"] if op["name"] == "Cutting")

    updated = product_service.update_product(store, product["id"], ProductUpdate(
        color="Indigo",
        operations=[
            OperationIn(id=cutting["id"], name="Cutting", amount_per_piece=3.5),
            OperationIn(id="new-1", name="Buttons", amount_per_piece=2),
        ],
    ))

    ops = {op["name"]: op for op in updated["operations"]}
    assert set(ops) == {"Cutting", "Buttons"}
    assert ops["Cutting"]["id"] == cutting["id"]
    assert ops["Cutting"]["amount_per_piece"] == 3.5
    assert updated["color"] == "Indigo"


def test_update_without_operations_leaves_them(store, product):
    updated = product_service.update_product(store, product["id"], ProductUpdate(name="Long Kurta"))
    assert updated["name"] == "Long Kurta"
    assert len(updated["operations"]) == 2


def test_toggle_and_delete(store, product):
    assert product_service.toggle_product_status(store, product["id"])["is_active"] is False
    assert product_service.delete_product(store, product["id"]) is True
    assert store.select("operations") == []
    with pytest.raises(NotFoundError):
        product_service.get_product(store, product["id"])


def test_list_products(store, product):
    [listed] = product_service.list_products(store)
    assert listed["id"] == product["id"]
    assert len(listed["operations"]) == 2
