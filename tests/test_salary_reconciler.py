from datetime import date

import pytest

from garment_erp.core.exceptions import DataStoreError
from garment_erp.data.sql_store import SqlAlchemyStore
from garment_erp.data.store import eq
from garment_erp.schemas.salary import ReconcileStatus
from garment_erp.services import salary_service

APRIL = date(2024, 4, 30)

# 25 present, 2 leave, 3 absent
APRIL_DAYS = (
    [(d, "present") for d in range(1, 26)]
    + [(26, "leave"), (27, "leave")]
    + [(28, "absent"), (29, "absent"), (30, "absent")]
)


def salary_rows(store, employee_id):
    return store.select("employee_salaries", filters=[eq("employee_id", employee_id)])


@pytest.fixture
def asha(make_employee, mark_days):
    emp = make_employee("Asha", salary_amount=30000)
    mark_days(emp["id"], 2024, 4, APRIL_DAYS)
    return emp


def test_gross_and_net_formulas():
    assert salary_service.compute_gross_salary(30000, 25, 2, 30) == 27000.0
    assert salary_service.compute_net_salary(27000.0, 2000.0) == 25000.0
    # 30000 / 31 * 27 = 26129.0322...
    assert salary_service.compute_gross_salary(30000, 27, 0, 31) == 26129.03


def test_round2_is_half_up():
    assert salary_service.round2(2.675) == 2.68
    assert salary_service.round2(1.005) == 1.01


def test_creates_missing_salary_row(store, asha):
    [result] = salary_service.reconcile_monthly_salaries(store, APRIL)

    assert result.status == ReconcileStatus.CREATED
    assert result.salary_month == "2024-04"
    assert result.gross_salary == 27000.0
    assert result.net_salary == 27000.0
    assert (result.present_days, result.leave_days, result.absent_days) == (25, 2, 3)

    [row] = salary_rows(store, asha["id"])
    assert row["gross_salary"] == 27000.0
    assert row["advance"] == 0.0
    assert row["net_salary"] == 27000.0
    assert row["paid"] is False
    assert row["employee_name"] == "Asha"


def test_updates_unpaid_row_and_keeps_advance(store, asha):
    store.insert("employee_salaries", [{
        "employee_id": asha["id"], "salary_month": "2024-04",
        "gross_salary": 0, "advance": 2000, "net_salary": -2000, "paid": False,
    }])

    [result] = salary_service.reconcile_monthly_salaries(store, APRIL)

    assert result.status == ReconcileStatus.UPDATED
    [row] = salary_rows(store, asha["id"])
    assert row["gross_salary"] == 27000.0
    assert row["advance"] == 2000.0
    assert row["net_salary"] == 25000.0


def test_paid_row_is_never_touched(store, asha):
    store.insert("employee_salaries", [{
        "employee_id": asha["id"], "salary_month": "2024-04",
        "gross_salary": 111.0, "advance": 11.0, "net_salary": 100.0, "paid": True,
    }])

    [result] = salary_service.reconcile_monthly_salaries(store, APRIL)

    assert result.status == ReconcileStatus.SKIPPED
    assert result.message == "Salary already paid"
    [row] = salary_rows(store, asha["id"])
    assert (row["gross_salary"], row["advance"], row["net_salary"]) == (111.0, 11.0, 100.0)


def test_rerun_is_idempotent(store, asha):
    first = salary_service.reconcile_monthly_salaries(store, APRIL)
    second = salary_service.reconcile_monthly_salaries(store, APRIL)

    assert first[0].status == ReconcileStatus.CREATED
    assert second[0].status == ReconcileStatus.UPDATED
    [row] = salary_rows(store, asha["id"])
    assert row["net_salary"] == 27000.0


def test_inactive_employees_are_ignored(store, make_employee):
    make_employee("Gone", is_active=False)
    assert salary_service.reconcile_monthly_salaries(store, APRIL) == []


def test_employee_without_attendance_gets_zero_salary(store, make_employee):
    emp = make_employee("New")
    [result] = salary_service.reconcile_monthly_salaries(store, APRIL)
    assert result.status == ReconcileStatus.CREATED
    assert result.gross_salary == 0.0
    assert result.attendance_incomplete is True


def test_incomplete_attendance_is_flagged(store, make_employee, mark_days):
    short = make_employee("Short")
    full = make_employee("Full")
    mark_days(short["id"], 2024, 4, [(d, "present") for d in range(1, 6)])
    mark_days(full["id"], 2024, 4, [(d, "present") for d in range(1, 10)])

    results = {r.employee_name: r for r in salary_service.reconcile_monthly_salaries(store, date(2024, 4, 10))}

    # 5 recorded days by the 10th is fewer than the 9 elapsed days
    assert results["Short"].attendance_incomplete is True
    assert results["Full"].attendance_incomplete is False
    # Informational only: the row is still written
    assert results["Short"].status == ReconcileStatus.CREATED


class AttendanceOutageStore(SqlAlchemyStore):
    """Attendance queries fail for one person."""

    def __init__(self, db, broken_person_id):
        super().__init__(db)
        self.broken_person_id = broken_person_id

    def select(self, table, columns=None, filters=None, order_by=None, limit=None):
        if table == "attendance" and any(f.column == "person_id" and f.value == self.broken_person_id for f in filters or []):
            raise DataStoreError("attendance shard offline", table=table)
        return super().select(table, columns, filters, order_by, limit)


class SalaryInsertFailureStore(SqlAlchemyStore):
    def __init__(self, db, broken_employee_id):
        super().__init__(db)
        self.broken_employee_id = broken_employee_id

    def insert(self, table, rows):
        if table == "employee_salaries" and rows[0].get("employee_id") == self.broken_employee_id:
            raise DataStoreError("insert failed", table=table)
        return super().insert(table, rows)


def test_attendance_failure_is_isolated_to_one_employee(db_session, make_employee):
    ok = make_employee("Anu")
    broken = make_employee("Bina")
    store = AttendanceOutageStore(db_session, broken["id"])

    results = {r.employee_id: r for r in salary_service.reconcile_monthly_salaries(store, APRIL)}

    assert results[broken["id"]].status == ReconcileStatus.ERROR
    assert results[broken["id"]].message == "Attendance summary unavailable"
    assert results[ok["id"]].status == ReconcileStatus.CREATED
    assert salary_rows(store, broken["id"]) == []


def test_write_failure_is_reported_per_employee(db_session, make_employee):
    ok = make_employee("Anu")
    broken = make_employee("Bina")
    store = SalaryInsertFailureStore(db_session, broken["id"])

    results = {r.employee_id: r for r in salary_service.reconcile_monthly_salaries(store, APRIL)}

    assert results[broken["id"]].status == ReconcileStatus.ERROR
    assert results[broken["id"]].message == "insert failed"
    assert results[ok["id"]].status == ReconcileStatus.CREATED


def test_employee_listing_failure_propagates(failing_store):
    with pytest.raises(DataStoreError):
        salary_service.reconcile_monthly_salaries(failing_store, APRIL)


class RacingStore(SqlAlchemyStore):
    """Hides the salary row on the first lookup, as if another run created it meanwhile."""

    hidden = True

    def select(self, table, columns=None, filters=None, order_by=None, limit=None):
        if table == "employee_salaries" and self.hidden:
            self.hidden = False
            return []
        return super().select(table, columns, filters, order_by, limit)


def test_lost_create_race_falls_back_to_update(db_session, store, asha):
    store.insert("employee_salaries", [{
        "employee_id": asha["id"], "salary_month": "2024-04",
        "gross_salary": 5.0, "advance": 500.0, "net_salary": -495.0, "paid": False,
    }])

    [result] = salary_service.reconcile_monthly_salaries(RacingStore(db_session), APRIL)

    assert result.status == ReconcileStatus.UPDATED
    [row] = salary_rows(store, asha["id"])
    assert row["gross_salary"] == 27000.0
    assert row["net_salary"] == 26500.0


class PaidMidwayStore(SqlAlchemyStore):
    """Marks the salary row paid just before the reconciler writes to it."""

    def update(self, table, patch, filters):
        if table == "employee_salaries" and "gross_salary" in patch:
            super().update(table, {"paid": True}, filters)
        return super().update(table, patch, filters)


class DeletedMidwayStore(SqlAlchemyStore):
    """Deletes the salary row just before the reconciler writes to it."""

    def update(self, table, patch, filters):
        if table == "employee_salaries" and "gross_salary" in patch:
            self.delete(table, filters)
        return super().update(table, patch, filters)


def test_row_paid_during_reconcile_is_skipped(db_session, store, asha):
    store.insert("employee_salaries", [{
        "employee_id": asha["id"], "salary_month": "2024-04",
        "gross_salary": 5.0, "advance": 500.0, "net_salary": -495.0, "paid": False,
    }])

    [result] = salary_service.reconcile_monthly_salaries(PaidMidwayStore(db_session), APRIL)

    assert result.status == ReconcileStatus.SKIPPED
    assert result.message == "Salary already paid"
    assert (result.gross_salary, result.advance, result.net_salary) == (5.0, 500.0, -495.0)
    [row] = salary_rows(store, asha["id"])
    assert row["paid"] is True
    assert (row["gross_salary"], row["net_salary"]) == (5.0, -495.0)


def test_row_deleted_during_reconcile_is_an_error(db_session, store, asha):
    store.insert("employee_salaries", [{
        "employee_id": asha["id"], "salary_month": "2024-04",
        "gross_salary": 5.0, "advance": 0.0, "net_salary": 5.0, "paid": False,
    }])

    [result] = salary_service.reconcile_monthly_salaries(DeletedMidwayStore(db_session), APRIL)

    assert result.status == ReconcileStatus.ERROR
    assert "changed during reconciliation" in result.message
    assert salary_rows(store, asha["id"]) == []


def test_reconcile_summary_counts_outcomes(store, make_employee, asha):
    paid = make_employee("Paid")
    store.insert("employee_salaries", [{
        "employee_id": paid["id"], "salary_month": "2024-04", "gross_salary": 1, "net_salary": 1, "paid": True,
    }])

    summary = salary_service.reconcile_summary(store, APRIL)

    assert summary.salary_month == "2024-04"
    assert (summary.created, summary.updated, summary.skipped, summary.errors) == (1, 0, 1, 0)
    assert len(summary.results) == 2
