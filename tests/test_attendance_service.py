from datetime import date

import pytest

from garment_erp.core.exceptions import ValidationFailed
from garment_erp.schemas.attendance import AttendanceRowIn
from garment_erp.services import attendance_service


def test_summary_counts_statuses_against_calendar_month(store, make_employee, mark_days):
    emp = make_employee()
    statuses = [(d, "present") for d in range(1, 26)] + [(26, "leave"), (27, "leave")] + [(d, "absent") for d in (28, 29, 30)]
    mark_days(emp["id"], 2024, 4, statuses)
    # Outside the month
    mark_days(emp["id"], 2024, 5, [(1, "present")])

    summary = attendance_service.summarize_attendance(store, emp["id"], 4, 2024)
    assert summary.total_days == 30
    assert (summary.present, summary.leave, summary.absent) == (25, 2, 3)
    assert summary.recorded_days == 30
    assert summary.percentage == pytest.approx(25 / 30)


def test_summary_without_rows_is_zero_not_none(store, make_employee):
    emp = make_employee()
    summary = attendance_service.summarize_attendance(store, emp["id"], 2, 2024)
    assert summary is not None
    assert summary.total_days == 29
    assert summary.present == summary.absent == summary.leave == 0
    assert summary.percentage == 0


def test_summary_ignores_other_person_types(store, make_employee):
    emp = make_employee()
    store.insert("attendance", [
        {"person_type": "worker", "person_id": emp["id"], "date": date(2024, 4, 1), "status": "present"}
    ])
    summary = attendance_service.summarize_attendance(store, emp["id"], 4, 2024)
    assert summary.present == 0


def test_summary_returns_none_when_store_fails(failing_store):
    assert attendance_service.summarize_attendance(failing_store, "x", 4, 2024) is None


def test_read_helpers_degrade_to_empty_lists(failing_store):
    assert attendance_service.get_active_employees(failing_store) == []
    assert attendance_service.get_attendance_by_date(failing_store, date(2024, 4, 1)) == []
    assert attendance_service.get_attendance_for_month(failing_store, 4, 2024) == []


def test_mark_attendance_defaults_missing_employees_to_absent(store, make_employee):
    a = make_employee("Asha")
    b = make_employee("Bala")
    make_employee("Gone", is_active=False)
    day = date(2024, 4, 10)

    result = attendance_service.mark_attendance(store, day, {a["id"]: "present"})
    assert result.saved == 2

    by_person = {r.person_id: r.status for r in attendance_service.get_attendance_by_date(store, day)}
    assert by_person == {a["id"]: "present", b["id"]: "absent"}


def test_remarking_a_day_overwrites(store, make_employee):
    a = make_employee()
    day = date(2024, 4, 10)
    attendance_service.mark_attendance(store, day, {a["id"]: "absent"})
    attendance_service.mark_attendance(store, day, {a["id"]: "leave"})

    rows = attendance_service.get_attendance_by_date(store, day)
    assert len(rows) == 1
    assert rows[0].status == "leave"


def test_invalid_status_is_rejected_before_any_write(store, make_employee):
    a = make_employee()
    with pytest.raises(ValidationFailed):
        attendance_service.mark_attendance(store, date(2024, 4, 10), {a["id"]: "holiday"})
    assert attendance_service.get_attendance_by_date(store, date(2024, 4, 10)) == []


def test_paid_month_attendance_is_frozen(store, make_employee):
    paid = make_employee("Paid")
    open_ = make_employee("Open")
    store.insert("employee_salaries", [
        {"employee_id": paid["id"], "salary_month": "2024-04", "gross_salary": 1000, "net_salary": 1000, "paid": True}
    ])

    result = attendance_service.mark_attendance(store, date(2024, 4, 10), {})
    assert result.saved == 1
    assert result.skipped_paid == [paid["id"]]
    rows = attendance_service.get_attendance_by_date(store, date(2024, 4, 10))
    assert [r.person_id for r in rows] == [open_["id"]]

    # Another month is not affected
    result = attendance_service.mark_attendance(store, date(2024, 5, 2), {})
    assert result.saved == 2


def test_bulk_update_attendance(store, make_employee, make_worker):
    emp = make_employee()
    worker = make_worker()
    rows = [
        AttendanceRowIn(person_type="employee", person_id=emp["id"], date=date(2024, 4, 1), status="present"),
        AttendanceRowIn(person_type="worker", person_id=worker["id"], date=date(2024, 4, 1), status="leave", shift="night"),
    ]
    assert attendance_service.bulk_update_attendance(store, rows).saved == 2
    assert attendance_service.bulk_update_attendance(store, []).saved == 0

    summary = attendance_service.summarize_attendance(store, worker["id"], 4, 2024, person_type="worker")
    assert summary.leave == 1


def test_range_query_is_end_exclusive(store, make_employee, mark_days):
    emp = make_employee()
    mark_days(emp["id"], 2024, 4, [(1, "present"), (2, "present"), (3, "absent")])
    rows = attendance_service.get_attendance_for_employee_in_range(store, emp["id"], date(2024, 4, 1), date(2024, 4, 3))
    assert [r.date.day for r in rows] == [1, 2]
