# tests/test_vegetarian.py

from datetime import date, timedelta

import pytest

import amlich
from amlich.core.errors import InvalidDateError, OutOfRangeError
from amlich.core.types import SolarDate
from amlich.rules.vegetarian import (
    VegetarianDateSet,
    audit_registrations,
    classify_dates,
    filter_vegetarian_claims,
    is_vegetarian_day,
    is_vegetarian_lunar_day,
    parse_flag,
    vegetarian_days,
)


@pytest.mark.parametrize("day,expected", [(1, True), (15, True), (2, False), (14, False), (16, False), (30, False)])
def test_lunar_day_rule(day, expected):
    assert is_vegetarian_lunar_day(day) is expected


def test_known_vegetarian_days():
    assert is_vegetarian_day(date(2025, 10, 6))       # 15/8
    assert is_vegetarian_day("2025-10-21")            # 1/9
    assert is_vegetarian_day(SolarDate(2024, 2, 10))  # Tet
    assert not is_vegetarian_day(date(2025, 10, 7))


def test_predicate_agrees_with_converter():
    d = date(2025, 1, 1)
    while d.year == 2025:
        lunar_day = amlich.convert_solar_to_lunar(d.day, d.month, d.year).day
        assert is_vegetarian_day(d) == (lunar_day in (1, 15))
        d += timedelta(days=1)


def test_vegetarian_status_ignores_weekends():
    # Tet 2024 fell on a Saturday
    assert date(2024, 2, 10).weekday() == 5
    assert is_vegetarian_day(date(2024, 2, 10))


def test_time_zone_matters():
    assert is_vegetarian_day(date(2007, 2, 17), 7)
    assert not is_vegetarian_day(date(2007, 2, 17), 8)
    assert is_vegetarian_day(date(2007, 2, 18), 8)
    assert not is_vegetarian_day(SolarDate(2007, 2, 17, tz_offset_hours=8))


def test_errors_propagate():
    with pytest.raises(InvalidDateError):
        is_vegetarian_day("2025-02-30")
    with pytest.raises(InvalidDateError):
        is_vegetarian_day("yesterday")
    with pytest.raises(OutOfRangeError):
        is_vegetarian_day(date(1500, 1, 1))


def test_vegetarian_days_of_month():
    assert vegetarian_days(2025, 10) == [date(2025, 10, 6), date(2025, 10, 21)]
    for year, month in ((2024, 2), (2025, 7), (2025, 8)):
        days = vegetarian_days(year, month)
        assert 1 <= len(days) <= 3
        assert all(is_vegetarian_day(d) for d in days)


def test_vegetarian_days_rejects_bad_month():
    with pytest.raises(InvalidDateError):
        vegetarian_days(2025, 13)


def test_filter_claims_mapping():
    claims = {
        "2025-10-06": True,   # 15/8
        "2025-10-07": True,   # 16/8, forged
        "2025-10-21": False,  # 1/9, not claimed
        "not-a-date": True,
        "1500-01-01": True,
        "2025-02-30": True,
        "2025-11-04": "true",  # only a real True counts
    }
    assert filter_vegetarian_claims(claims) == {"2025-10-06"}


def test_filter_claims_iterable_normalizes_keys():
    accepted = filter_vegetarian_claims(["2025-10-21", "2025-10-22", date(2025, 10, 6), "2025-10-6"])
    assert accepted == {"2025-10-21", "2025-10-06"}


def test_filter_claims_single_string():
    assert filter_vegetarian_claims("2025-10-06") == {"2025-10-06"}
    assert filter_vegetarian_claims("2025-10-07") == set()
    assert VegetarianDateSet.from_claims("2025-10-21").to_claims() == {"2025-10-21": True}


def test_filter_claims_logs_drops(caplog):
    with caplog.at_level("DEBUG", logger="amlich.rules.vegetarian"):
        filter_vegetarian_claims({"2025-10-07": True, "garbage": True})
    assert "2025-10-07" in caplog.text
    assert "garbage" in caplog.text


def test_filter_claims_empty():
    assert filter_vegetarian_claims({}) == set()
    assert filter_vegetarian_claims([]) == set()


def test_classify_dates():
    summary = classify_dates(["2025-10-06", date(2025, 10, 21)])
    assert summary.vegetarian == ["2025-10-06", "2025-10-21"]
    assert summary.normal == []
    assert summary.all_vegetarian

    mixed = classify_dates(["2025-10-06", "2025-10-07"])
    assert mixed.normal == ["2025-10-07"]
    assert not mixed.all_vegetarian

    assert not classify_dates([]).all_vegetarian

    with pytest.raises(InvalidDateError):
        classify_dates(["2025-13-01"])


def test_date_set_guards_membership():
    s = VegetarianDateSet()
    s.add(date(2025, 10, 6))
    with pytest.raises(ValueError):
        s.add("2025-10-07")
    assert "2025-10-06" in s
    assert "2025-10-6" in s
    assert date(2025, 10, 6) in s
    assert "2025-10-07" not in s
    assert "garbage" not in s
    assert len(s) == 1


def test_date_set_toggle_and_order():
    s = VegetarianDateSet(["2025-10-21"])
    assert s.toggle("2025-10-06") is True
    assert list(s) == ["2025-10-06", "2025-10-21"]
    assert s.toggle("2025-10-21") is False
    assert list(s) == ["2025-10-06"]
    with pytest.raises(ValueError):
        s.toggle("2025-10-08")
    s.discard("2025-10-06")
    s.discard("2025-10-06")
    assert len(s) == 0


def test_date_set_from_claims():
    s = VegetarianDateSet.from_claims({"2025-10-06": True, "2025-10-07": True})
    assert s.to_claims() == {"2025-10-06": True}


@pytest.mark.parametrize("value,expected", [
    (True, True), (False, False), ("true", True), ("TRUE", True), ("t", True), ("1", True),
    ("false", False), ("0", False), ("", False), (None, False),
])
def test_parse_flag(value, expected):
    assert parse_flag(value) is expected


def test_audit_registrations():
    records = [
        {"id": 1, "registration_date": "2025-10-06", "is_vegetarian": True},
        {"id": 2, "registration_date": "2025-10-07", "is_vegetarian": "true"},
        {"id": 3, "registration_date": "2025-10-08", "is_vegetarian": False},
        {"id": 4, "registration_date": date(2025, 10, 21), "is_vegetarian": "1"},
        {"id": 5, "registration_date": "2025-02-30", "is_vegetarian": True},
    ]
    report = audit_registrations(records)
    assert [r["id"] for r in report.valid] == [1, 4]
    assert [f.record["id"] for f in report.invalid] == [2, 5]
    assert "16/8" in report.invalid[0].reason
    assert report.checked == 4
