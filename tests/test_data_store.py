from datetime import date

import pytest

from garment_erp.core.exceptions import DataStoreError, UniqueViolation
from garment_erp.data.store import Filter, eq, gt, gte, in_, lt, lte, neq


@pytest.fixture
def workers(make_worker):
    return [make_worker(name) for name in ("Ravi", "Mina", "Arun")]


def test_select_filters_and_ordering(store, workers):
    store.update("workers", {"is_active": False}, [eq("name", "Mina")])

    active = store.select("workers", columns=["name"], filters=[eq("is_active", True)], order_by=["name"])
    assert active == [{"name": "Arun"}, {"name": "Ravi"}]

    others = store.select("workers", columns=["name"], filters=[neq("name", "Ravi")], order_by=["-name"])
    assert [r["name"] for r in others] == ["Mina", "Arun"]

    picked = store.select("workers", filters=[in_("id", [workers[0]["id"], workers[2]["id"]])], limit=1)
    assert len(picked) == 1


def test_range_filters_accept_iso_strings(store, make_worker):
    worker = make_worker()
    store.insert("worker_salaries", [
        {"worker_id": worker["id"], "date": f"2024-04-{day:02d}", "pieces_done": day}
        for day in (1, 15, 30)
    ])

    def pieces(*filters):
        return sorted(r["pieces_done"] for r in store.select("worker_salaries", filters=list(filters)))

    assert pieces(gte("date", "2024-04-15")) == [15, 30]
    assert pieces(gt("date", date(2024, 4, 15))) == [30]
    assert pieces(lt("date", "2024-04-15")) == [1]
    assert pieces(lte("date", date(2024, 4, 15)), gte("date", date(2024, 4, 1))) == [1, 15]


def test_eq_none_matches_null(store, make_product):
    product, _ = make_product(product_code=None)
    assert store.select("products", columns=["id"], filters=[eq("product_code", None)]) == [{"id": product["id"]}]


def test_update_returns_changed_rows(store, workers):
    rows = store.update("workers", {"worker_code": "OL-1"}, [in_("name", ["Ravi", "Arun"])])
    assert sorted(r["name"] for r in rows) == ["Arun", "Ravi"]
    assert all(r["worker_code"] == "OL-1" for r in rows)
    assert store.update("workers", {"worker_code": "x"}, [eq("name", "Nobody")]) == []


def test_upsert_on_natural_key(store, make_employee):
    emp = make_employee()
    key = ("person_type", "person_id", "date")
    row = {"person_type": "employee", "person_id": emp["id"], "date": date(2024, 4, 1), "status": "present"}

    [first] = store.upsert("attendance", [row], key)
    [second] = store.upsert("attendance", [dict(row, status="leave")], key)

    assert first["id"] == second["id"]
    assert second["status"] == "leave"
    assert len(store.select("attendance")) == 1


def test_delete_counts_rows(store, workers):
    assert store.delete("workers", [eq("name", "Ravi")]) == 1
    assert store.delete("workers", [eq("name", "Ravi")]) == 0


def test_unique_violation(store, make_employee):
    emp = make_employee()
    row = {"employee_id": emp["id"], "salary_month": "2024-04"}
    store.insert("employee_salaries", [row])

    with pytest.raises(UniqueViolation) as exc:
        store.insert("employee_salaries", [row])
    assert exc.value.status_code == 409
    # the session is usable again after the rollback
    assert len(store.select("employee_salaries")) == 1


def test_unknown_table_and_column(store):
    with pytest.raises(DataStoreError, match="Unknown table"):
        store.select("payroll")
    with pytest.raises(DataStoreError, match="Unknown column"):
        store.select("workers", filters=[eq("salary", 1)])


def test_unknown_procedure(store):
    with pytest.raises(DataStoreError, match="Unknown procedure"):
        store.rpc("drop_everything", {})


def test_filter_rejects_unknown_operator():
    with pytest.raises(ValueError):
        Filter("name", "like", "R%")


def test_malformed_iso_date_is_a_store_error(store):
    with pytest.raises(DataStoreError, match="Invalid date value") as exc:
        store.select("attendance", filters=[eq("date", "2024-13-45")])
    assert exc.value.status_code == 503
    with pytest.raises(DataStoreError):
        store.select("attendance", filters=[gte("created_at", "yesterday")])
