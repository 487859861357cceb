# tests/test_lunisolar.py

import random
from datetime import date, timedelta

import pytest

from amlich.core.errors import InvalidDateError, OutOfRangeError
from amlich.core.types import ConverterSpec, EngineId, LunarDate
from amlich.engines.factory import make_engine
from amlich.engines.specs import CHINA, VIETNAM, custom_spec


@pytest.fixture(scope="module")
def vn():
    return make_engine(VIETNAM)


@pytest.fixture(scope="module")
def cn():
    return make_engine(CHINA)


# Known Vietnamese calendar dates (UTC+7)
KNOWN_DATES = [
    (date(2000, 2, 5), LunarDate(1, 1, False, 2000)),
    (date(2023, 1, 22), LunarDate(1, 1, False, 2023)),
    (date(2023, 3, 22), LunarDate(1, 2, True, 2023)),
    (date(2020, 5, 23), LunarDate(1, 4, True, 2020)),
    (date(2024, 2, 10), LunarDate(1, 1, False, 2024)),
    (date(2024, 9, 17), LunarDate(15, 8, False, 2024)),
    (date(2025, 1, 29), LunarDate(1, 1, False, 2025)),
    (date(2025, 7, 25), LunarDate(1, 6, True, 2025)),
    (date(2025, 10, 6), LunarDate(15, 8, False, 2025)),
    (date(2025, 10, 21), LunarDate(1, 9, False, 2025)),
    (date(2026, 2, 17), LunarDate(1, 1, False, 2026)),
    (date(2054, 5, 7), LunarDate(30, 3, False, 2054)),
]


@pytest.mark.parametrize("d,expected", KNOWN_DATES)
def test_known_vietnamese_dates(vn, d, expected):
    assert vn.from_solar(d.day, d.month, d.year) == expected


def test_true_new_moon_after_mean_estimate(vn):
    assert vn.from_solar(6, 5, 2054) == LunarDate(29, 3, False, 2054)
    assert vn.from_solar(7, 5, 2054) == LunarDate(30, 3, False, 2054)
    assert vn.from_solar(8, 5, 2054) == LunarDate(1, 4, False, 2054)
    assert vn.month_bounds(3, 2054)[1] == date(2054, 5, 7)


# Last day of a lunar month whose successor starts the day after a late mean new moon.
@pytest.mark.parametrize(
    "engine,d",
    [
        ("vn", date(1877, 4, 13)),
        ("vn", date(1885, 3, 16)),
        ("vn", date(2054, 5, 7)),
        ("vn", date(2062, 4, 9)),
        ("cn", date(1947, 3, 22)),
        ("cn", date(2009, 3, 26)),
    ],
)
def test_last_day_before_late_new_moon(request, engine, d):
    eng = request.getfixturevalue(engine)
    t = eng.from_solar(d.day, d.month, d.year)
    nxt = d + timedelta(days=1)
    assert t.day in (29, 30)
    assert eng.from_solar(nxt.day, nxt.month, nxt.year).day == 1
    assert eng.to_solar(t.day, t.month, t.year, t.is_leap_month) == d


def test_day_before_tet_is_end_of_year(vn):
    t = vn.from_solar(9, 2, 2024)
    assert t.month == 12
    assert t.year == 2023
    assert t.day in (29, 30)


def test_time_zone_changes_tet_2007(vn, cn):
    """The 2007 new moon fell at 23:14 UTC+7, i.e. 00:14 UTC+8 the next day."""
    assert vn.from_solar(17, 2, 2007) == LunarDate(1, 1, False, 2007)
    assert cn.from_solar(17, 2, 2007) == LunarDate(30, 12, False, 2006)
    assert cn.from_solar(18, 2, 2007) == LunarDate(1, 1, False, 2007)
    assert vn.new_year_day(2007) == date(2007, 2, 17)
    assert cn.new_year_day(2007) == date(2007, 2, 18)


def test_conversion_is_deterministic(vn):
    a = vn.from_solar(6, 10, 2025)
    b = vn.from_solar(6, 10, 2025)
    assert a == b


def test_day_sequence_is_monotone(vn):
    d = date(2024, 1, 1)
    prev = vn.from_solar(d.day, d.month, d.year)
    while d < date(2026, 12, 31):
        d += timedelta(days=1)
        cur = vn.from_solar(d.day, d.month, d.year)
        if cur.day == 1:
            assert prev.day in (29, 30)
        else:
            assert cur.day == prev.day + 1
            assert (cur.month, cur.is_leap_month, cur.year) == (prev.month, prev.is_leap_month, prev.year)
        prev = cur


def test_output_ranges(vn):
    random.seed(3)
    for _ in range(300):
        d = date(1850, 1, 1) + timedelta(days=random.randint(0, 365 * 300))
        t = vn.from_solar(d.day, d.month, d.year)
        assert 1 <= t.day <= 30
        assert 1 <= t.month <= 12
        assert t.year in (d.year - 1, d.year)


def test_round_trip_recent_years(vn):
    d = date(2020, 1, 1)
    while d <= date(2025, 12, 31):
        t = vn.from_solar(d.day, d.month, d.year)
        assert vn.to_solar(t.day, t.month, t.year, t.is_leap_month) == d
        d += timedelta(days=1)


def test_round_trip_random_dates(vn, cn):
    random.seed(123)
    for eng in (vn, cn):
        for _ in range(400):
            d = date(1801, 1, 1) + timedelta(days=random.randint(0, 365 * 398))
            t = eng.from_solar(d.day, d.month, d.year)
            assert eng.to_solar(t.day, t.month, t.year, t.is_leap_month) == d


@pytest.mark.parametrize("engine", ["vn", "cn"])
def test_full_range_scan(request, engine):
    eng = request.getfixturevalue(engine)
    d = date(eng.spec.min_year, 1, 1)
    end = date(eng.spec.max_year, 12, 31)
    prev = None
    while d <= end:
        t = eng.from_solar(d.day, d.month, d.year)
        assert 1 <= t.day <= 30, d
        assert 1 <= t.month <= 12, d
        if prev is not None:
            if t.day == 1:
                assert prev.day in (29, 30), d
            else:
                assert t.day == prev.day + 1, d
                assert (t.month, t.is_leap_month, t.year) == (prev.month, prev.is_leap_month, prev.year), d
        assert eng.to_solar(t.day, t.month, t.year, t.is_leap_month) == d
        prev = t
        d += timedelta(days=1)


@pytest.mark.parametrize("year,leap", [(2020, 4), (2023, 2), (2025, 6), (2024, None), (2022, None)])
def test_leap_month(vn, year, leap):
    assert vn.leap_month(year) == leap


def test_leap_month_instances(vn):
    assert vn.to_solar(1, 6, 2025) == date(2025, 6, 25)
    assert vn.to_solar(1, 6, 2025, is_leap_month=True) == date(2025, 7, 25)
    assert vn.days_in_month(6, 2025, is_leap_month=True) == 29


def test_month_bounds_and_length(vn):
    assert vn.month_bounds(9, 2025) == (date(2025, 10, 21), date(2025, 11, 19))
    assert vn.days_in_month(9, 2025) == 30


def test_month_lengths_are_29_or_30(vn):
    for year in range(2018, 2030):
        for m in range(1, 13):
            assert vn.days_in_month(m, year) in (29, 30)


def test_to_solar_rejects_bad_labels(vn):
    with pytest.raises(InvalidDateError):
        vn.to_solar(1, 13, 2025)
    with pytest.raises(InvalidDateError):
        vn.to_solar(0, 1, 2025)
    with pytest.raises(InvalidDateError):
        vn.to_solar(31, 1, 2025)
    with pytest.raises(InvalidDateError):
        vn.to_solar(30, 6, 2025, is_leap_month=True)
    with pytest.raises(InvalidDateError):
        vn.to_solar(1, 5, 2025, is_leap_month=True)
    with pytest.raises(InvalidDateError):
        vn.to_solar(1, 1, 2024, is_leap_month=True)
    with pytest.raises(OutOfRangeError):
        vn.to_solar(1, 1, 2300)


@pytest.mark.parametrize("day,month,year", [(30, 2, 2024), (1, 13, 2025), (0, 1, 2025), (31, 4, 2025)])
def test_from_solar_invalid_date(vn, day, month, year):
    with pytest.raises(InvalidDateError):
        vn.from_solar(day, month, year)


@pytest.mark.parametrize("year", [1000, 1799, 2200, 9999])
def test_from_solar_out_of_range(vn, year):
    with pytest.raises(OutOfRangeError):
        vn.from_solar(1, 6, year)


def test_from_solar_rejects_non_integers(vn):
    with pytest.raises(InvalidDateError):
        vn.from_solar(True, 1, 2025)
    with pytest.raises(InvalidDateError):
        vn.from_solar(1.0, 1, 2025)
    with pytest.raises(InvalidDateError):
        vn.from_solar("1", 1, 2025)


def test_range_boundaries(vn):
    vn.from_solar(1, 1, 1800)
    vn.from_solar(31, 12, 2199)


def test_range_edges_round_trip(vn):
    for d in (date(1800, 1, 1), date(2199, 12, 31)):
        t = vn.from_solar(d.day, d.month, d.year)
        assert vn.to_solar(t.day, t.month, t.year, t.is_leap_month) == d
    # 1/1/1800 is still in lunar year 1799, but its Tet is not.
    assert vn.from_solar(1, 1, 1800).year == 1799
    with pytest.raises(OutOfRangeError):
        vn.new_year_day(1799)
    with pytest.raises(OutOfRangeError):
        vn.to_solar(1, 1, 1798)


def test_solar_term(vn):
    # December solstice 2024: Dec 21, 16:20 UTC+7
    assert vn.solar_term(21, 12, 2024) == 17
    assert vn.solar_term(22, 12, 2024) == 18
    # June solstice 2025: Jun 21, 09:42 UTC+7
    assert vn.solar_term(22, 6, 2025) == 6


def test_new_moon_day_is_local(vn, cn):
    k = 1325  # 2007 February new moon, 16:14 UT
    assert cn.new_moon_day(k) - vn.new_moon_day(k) == 1


def test_day_info(vn):
    info = vn.day_info(date(2024, 2, 10), debug=True)
    assert info.lunar == LunarDate(1, 1, False, 2024)
    assert info.jdn == 2460351
    assert info.engine.name == "vietnam"
    assert info.debug["month_start"] == date(2024, 2, 10)


def test_info(vn):
    i = vn.info()
    assert i["tz_offset_hours"] == 7
    assert (i["min_year"], i["max_year"]) == (1800, 2199)


def test_spec_validation():
    eid = EngineId("custom", "x", "1.0")
    with pytest.raises(ValueError):
        ConverterSpec(id=eid, tz_offset_hours=15)
    with pytest.raises(ValueError):
        ConverterSpec(id=eid, tz_offset_hours=7.5)
    with pytest.raises(ValueError):
        ConverterSpec(id=eid, tz_offset_hours=7, min_year=2100, max_year=2000)


def test_spec_like_and_tweak():
    spec = ConverterSpec.like("vietnam").tweak(min_year=2025, max_year=2025)
    eng = make_engine(spec)
    eng.from_solar(6, 10, 2025)
    with pytest.raises(OutOfRangeError):
        eng.from_solar(31, 12, 2024)
    with pytest.raises(KeyError):
        ConverterSpec.like("mars")


def test_custom_spec():
    spec = custom_spec(9)
    assert spec.tz_offset_hours == 9
    assert spec.id.name == "utc+9"
    assert make_engine(spec).from_solar(6, 10, 2025).day == 15


def test_make_engine_rejects_other_types():
    with pytest.raises(TypeError):
        make_engine({"tz_offset_hours": 7})
