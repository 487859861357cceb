"""
amlich.grid
-----------
Month grid for calendar rendering: full weeks covering a solar month, each
cell annotated with its lunar label and vegetarian status.

Cells are resolved through a LunarDateCache, so re-rendering the same
month (or the overlapping edge weeks of adjacent months) is a lookup.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import List, Optional

from .cache import LunarDateCache
from .core.errors import InvalidDateError, OutOfRangeError
from .core.time import days_in_solar_month, validate_ymd
from .core.types import LunarDate
from .rules.vegetarian import is_vegetarian_lunar_day

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CalendarCell:
    date: date
    in_month: bool
    is_weekend: bool
    lunar: Optional[LunarDate] = None
    label: Optional[str] = None
    vegetarian: bool = False


def _cell(d: date, in_month: bool, cache: LunarDateCache) -> CalendarCell:
    weekend = d.weekday() >= 5
    try:
        lunar_date = cache.get(d.day, d.month, d.year)
    except (InvalidDateError, OutOfRangeError) as e:
        # Unconvertible cell: render the solar date only.
        logger.warning("no lunar label for %s: %s", d.isoformat(), e)
        return CalendarCell(date=d, in_month=in_month, is_weekend=weekend)
    return CalendarCell(
        date=d,
        in_month=in_month,
        is_weekend=weekend,
        lunar=lunar_date,
        label=lunar_date.label,
        vegetarian=is_vegetarian_lunar_day(lunar_date.day),
    )


def month_grid(
    year: int,
    month: int,
    *,
    cache: Optional[LunarDateCache] = None,
    first_weekday: int = 0,
) -> List[List[CalendarCell]]:
    """
    Weeks (lists of 7 cells) covering the solar month, padded with days of
    the neighbouring months. first_weekday: 0=Monday .. 6=Sunday.
    """
    validate_ymd(1, month, year)
    if not 0 <= first_weekday <= 6:
        raise ValueError(f"first_weekday must be in 0..6, got {first_weekday!r}")
    if cache is None:
        from .api import default_cache
        cache = default_cache()

    first = date(year, month, 1)
    last = date(year, month, days_in_solar_month(month, year))
    start = first - timedelta(days=(first.weekday() - first_weekday) % 7)
    end = last + timedelta(days=(first_weekday - 1 - last.weekday()) % 7)

    weeks: List[List[CalendarCell]] = []
    d = start
    while d <= end:
        week = []
        for _ in range(7):
            week.append(_cell(d, d.month == month, cache))
            d += timedelta(days=1)
        weeks.append(week)
    return weeks
