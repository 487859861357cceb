from __future__ import annotations
import calendar
import re
from datetime import date
from typing import Tuple, Union

from .errors import InvalidDateError
from .types import SolarDate

DateLike = Union[date, SolarDate, str]

_KEY_RE = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})$")
_MONTH_DAYS = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def jdn_from_ymd(day: int, month: int, year: int) -> int:
    """Gregorian date -> Julian Day Number (Fliegel-Van Flandern, proleptic Gregorian)."""
    a = (14 - month) // 12
    y = year + 4800 - a
    m = month + 12 * a - 3
    return day + (153 * m + 2) // 5 + 365 * y + y // 4 - y // 100 + y // 400 - 32045


def ymd_from_jdn(jdn: int) -> Tuple[int, int, int]:
    """Inverse of jdn_from_ymd, returned as (day, month, year)."""
    a = jdn + 32044
    b = (4 * a + 3) // 146097
    c = a - (146097 * b) // 4
    d = (4 * c + 3) // 1461
    e = c - (1461 * d) // 4
    m = (5 * e + 2) // 153
    day = e - (153 * m + 2) // 5 + 1
    month = m + 3 - 12 * (m // 10)
    year = 100 * b + d - 4800 + (m // 10)
    return day, month, year


def to_jdn(d: date) -> int:
    return jdn_from_ymd(d.day, d.month, d.year)


def from_jdn(jdn: int) -> date:
    day, month, year = ymd_from_jdn(jdn)
    return date(year, month, day)


def days_in_solar_month(month: int, year: int) -> int:
    if month == 2 and calendar.isleap(year):
        return 29
    return _MONTH_DAYS[month - 1]


def _require_int(name: str, value: object) -> int:
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidDateError(f"{name} must be an integer", {name: value})
    return value


def validate_ymd(day: int, month: int, year: int) -> None:
    """Raise InvalidDateError unless (day, month, year) is a well-formed Gregorian date."""
    _require_int("day", day)
    _require_int("month", month)
    _require_int("year", year)
    if not 1 <= month <= 12:
        raise InvalidDateError("month out of range 1..12", {"month": month})
    last = days_in_solar_month(month, year)
    if not 1 <= day <= last:
        raise InvalidDateError(
            f"day out of range 1..{last}", {"day": day, "month": month, "year": year}
        )


def date_key(day: int, month: int, year: int) -> str:
    """Collision-free "YYYY-MM-DD" key for a solar date."""
    validate_ymd(day, month, year)
    return f"{year:04d}-{month:02d}-{day:02d}"


def parse_date_key(s: str) -> Tuple[int, int, int]:
    """Parse "YYYY-MM-DD" into (day, month, year)."""
    m = _KEY_RE.match(s.strip()) if isinstance(s, str) else None
    if m is None:
        raise InvalidDateError("expected a YYYY-MM-DD date string", {"value": s})
    year, month, day = (int(g) for g in m.groups())
    validate_ymd(day, month, year)
    return day, month, year


def coerce_ymd(d: DateLike) -> Tuple[int, int, int]:
    """Accept a date, SolarDate or "YYYY-MM-DD" string; return (day, month, year)."""
    if isinstance(d, SolarDate):
        validate_ymd(d.day, d.month, d.year)
        return d.day, d.month, d.year
    if isinstance(d, date):
        return d.day, d.month, d.year
    if isinstance(d, str):
        return parse_date_key(d)
    raise InvalidDateError(f"unsupported date type {type(d).__name__}", {"value": d})
