from datetime import date

import pytest

from garment_erp.services.period_filter import Period, efficiency, in_period, round_half_up, week_number

REF = date(2024, 4, 15)


def test_week_number_starts_on_sunday():
    # 2024-01-01 is a Monday, so week 1 runs Sun 2023-12-31 .. Sat 2024-01-06
    assert week_number(date(2024, 1, 1)) == 1
    assert week_number(date(2024, 1, 6)) == 1
    assert week_number(date(2024, 1, 7)) == 2


def test_weekly_boundary_between_saturday_and_sunday():
    assert week_number(date(2024, 3, 2)) == 9
    assert week_number(date(2024, 3, 3)) == 10
    assert in_period(date(2024, 3, 2), Period.WEEKLY, date(2024, 3, 1))
    assert not in_period(date(2024, 3, 3), Period.WEEKLY, date(2024, 3, 2))


@pytest.mark.parametrize("record_date, period, expected", [
    (date(2024, 4, 15), Period.DAILY, True),
    (date(2024, 4, 14), Period.DAILY, False),
    (date(2024, 4, 1), Period.MONTHLY, True),
    (date(2023, 4, 1), Period.MONTHLY, False),
    (date(2024, 12, 31), Period.YEARLY, True),
    (date(2025, 1, 1), Period.YEARLY, False),
    ("2024-04-02", Period.MONTHLY, True),
    ("2024-04-15T18:30:00Z", Period.DAILY, True),
])
def test_in_period(record_date, period, expected):
    assert in_period(record_date, period, REF) is expected


def test_weekly_requires_same_year():
    # Week 16 of 2023, same week number as the reference
    assert week_number(date(2023, 4, 17)) == week_number(REF)
    assert not in_period(date(2023, 4, 17), Period.WEEKLY, REF)


def test_period_accepts_plain_strings():
    assert in_period(date(2024, 4, 20), "monthly", REF)


@pytest.mark.parametrize("bad", [None, "", "not-a-date", "2024-13-45"])
def test_missing_or_unparseable_dates_never_match(bad, caplog):
    assert in_period(bad, Period.YEARLY, REF) is False
    assert any("Skipping record" in r.message for r in caplog.records)


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(3.5) == 4
    assert round_half_up(2.49) == 2


def test_efficiency():
    assert efficiency(25, 2) == 125
    assert efficiency(5, 3) == 17
    # Python's round() would give 2 here
    assert efficiency(1, 4) == 3


def test_efficiency_without_pieces_is_zero():
    assert efficiency(0, 5) == 0
    assert efficiency(-3, 1) == 0


def test_efficiency_with_no_records_uses_target_of_one():
    assert efficiency(5, 0) == 500
