"""
amlich.engines.lunisolar
------------------------
The converter. Maps civil Julian Day Numbers to lunisolar labels
(day, month, leap flag, year) and back, for one fixed UTC offset.

Month boundaries are the local civil days holding a true new moon. The
lunar year is anchored on month 11, the month containing the winter
solstice; when 13 new moons separate two consecutive months 11, the first
month after the anchor that contains no principal solar term is the leap
month and repeats the number of the month before it.
"""

from __future__ import annotations

import math
from datetime import date
from typing import Any, Dict, Tuple

from ..core.errors import InvalidDateError, OutOfRangeError
from ..core.time import from_jdn, jdn_from_ymd, to_jdn, validate_ymd
from ..core.types import ConverterSpec, DayInfo, LunarDate
from ..reference import astro_args as aa
from ..reference import lunar, solar

# Sector (of 12) that starts at the winter solstice, longitude 270 degrees.
_WINTER_SOLSTICE_SECTOR = 9


class LunisolarEngine:
    """
    Solar <-> lunar conversion for the civil day of one time zone.

    Pure: every method is a function of its arguments and its ConverterSpec.
    """
    def __init__(self, spec: ConverterSpec):
        self.spec = spec
        self.id = spec.id
        self.tz_offset_hours = spec.tz_offset_hours

    # ---------------------------------------------------------
    # Astronomical events on the local civil day grid
    # ---------------------------------------------------------

    def new_moon_day(self, k: int) -> int:
        """Local JDN of the k-th new moon after 1900-01-01."""
        return math.floor(lunar.new_moon_jd(k) + 0.5 + self.tz_offset_hours / 24.0)

    def _sun_sector_at_midnight(self, jdn: int, sectors: int = 12) -> int:
        return solar.sun_sector(jdn - 0.5 - self.tz_offset_hours / 24.0, sectors)

    def lunar_month_11(self, year: int) -> int:
        """Local JDN on which month 11 (the winter solstice month) of solar year `year` begins."""
        off = jdn_from_ymd(31, 12, year) - 2415021
        k = math.floor(off / aa.SYNODIC_MONTH)
        nm = self.new_moon_day(k)
        # A new moon already past the solstice starts month 12, not 11.
        if self._sun_sector_at_midnight(nm) >= _WINTER_SOLSTICE_SECTOR:
            nm = self.new_moon_day(k - 1)
        return nm

    def leap_month_offset(self, a11: int) -> int:
        """
        Offset (in months) from month 11 starting at a11 to the first month
        without a principal term, i.e. whose start and the next month's start
        lie in the same 30-degree sector.
        """
        k = aa.nearest_lunation_index(a11)
        i = 1
        arc = self._sun_sector_at_midnight(self.new_moon_day(k + i))
        while True:
            last = arc
            i += 1
            arc = self._sun_sector_at_midnight(self.new_moon_day(k + i))
            if arc == last or i >= 14:
                break
        return i - 1

    @staticmethod
    def _leap_label(leap_off: int) -> int:
        m = leap_off + 10
        return m - 12 if m > 12 else m

    # ---------------------------------------------------------
    # Range / input checks
    # ---------------------------------------------------------

    def _check_range(self, year: int) -> None:
        if not self.spec.min_year <= year <= self.spec.max_year:
            raise OutOfRangeError(
                f"year {year} outside supported range {self.spec.min_year}..{self.spec.max_year}",
                {"year": year, "engine": self.id.name},
            )

    def _check_lunar_range(self, year: int) -> None:
        # Early January of min_year still belongs to lunar year min_year - 1.
        if not self.spec.min_year - 1 <= year <= self.spec.max_year:
            raise OutOfRangeError(
                f"lunar year {year} outside supported range {self.spec.min_year - 1}..{self.spec.max_year}",
                {"year": year, "engine": self.id.name},
            )

    # ---------------------------------------------------------
    # Forward: solar -> lunar
    # ---------------------------------------------------------

    def from_solar(self, day: int, month: int, year: int) -> LunarDate:
        validate_ymd(day, month, year)
        self._check_range(year)
        return self._lunar_from_jdn(jdn_from_ymd(day, month, year), year)

    def _lunar_from_jdn(self, jdn: int, year: int) -> LunarDate:
        k = aa.lunation_index(jdn) + 1
        month_start = self.new_moon_day(k)
        # The mean-lunation estimate can land after the local day of the true new moon.
        while month_start > jdn:
            k -= 1
            month_start = self.new_moon_day(k)

        a11 = self.lunar_month_11(year)
        b11 = a11
        if a11 >= month_start:
            lunar_year = year
            a11 = self.lunar_month_11(year - 1)
        else:
            lunar_year = year + 1
            b11 = self.lunar_month_11(year + 1)

        lunar_day = jdn - month_start + 1
        diff = (month_start - a11) // 29
        is_leap = False
        lunar_month = diff + 11
        if b11 - a11 > 365:
            leap_diff = self.leap_month_offset(a11)
            if diff >= leap_diff:
                lunar_month = diff + 10
                if diff == leap_diff:
                    is_leap = True
        if lunar_month > 12:
            lunar_month -= 12
        # Months 11 and 12 right after the anchor still belong to the previous year.
        if lunar_month >= 11 and diff < 4:
            lunar_year -= 1

        return LunarDate(day=lunar_day, month=lunar_month, is_leap_month=is_leap, year=lunar_year)

    # ---------------------------------------------------------
    # Inverse: lunar -> solar
    # ---------------------------------------------------------

    def _month_start(self, month: int, year: int, is_leap_month: bool) -> Tuple[int, int]:
        """(first local JDN, length in days) of a lunar month."""
        for name, value in (("month", month), ("year", year)):
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidDateError(f"lunar {name} must be an integer", {name: value})
        if not 1 <= month <= 12:
            raise InvalidDateError("lunar month out of range 1..12", {"month": month})
        self._check_lunar_range(year)

        if month < 11:
            a11 = self.lunar_month_11(year - 1)
            b11 = self.lunar_month_11(year)
        else:
            a11 = self.lunar_month_11(year)
            b11 = self.lunar_month_11(year + 1)

        k = aa.nearest_lunation_index(a11)
        off = month - 11
        if off < 0:
            off += 12

        leap_ok = False
        if b11 - a11 > 365:
            leap_off = self.leap_month_offset(a11)
            leap_ok = self._leap_label(leap_off) == month
            if is_leap_month and not leap_ok:
                raise InvalidDateError(
                    f"month {month} of lunar year {year} is not a leap month",
                    {"month": month, "year": year},
                )
            if is_leap_month or off >= leap_off:
                off += 1
        elif is_leap_month:
            raise InvalidDateError(
                f"lunar year {year} has no leap month", {"month": month, "year": year}
            )

        start = self.new_moon_day(k + off)
        return start, self.new_moon_day(k + off + 1) - start

    def to_solar(self, day: int, month: int, year: int, is_leap_month: bool = False) -> date:
        if isinstance(day, bool) or not isinstance(day, int):
            raise InvalidDateError("lunar day must be an integer", {"day": day})
        start, length = self._month_start(month, year, bool(is_leap_month))
        if not 1 <= day <= length:
            raise InvalidDateError(
                f"lunar day out of range 1..{length}",
                {"day": day, "month": month, "year": year, "is_leap_month": bool(is_leap_month)},
            )
        d = from_jdn(start + day - 1)
        self._check_range(d.year)
        return d

    # ---------------------------------------------------------
    # Month / year helpers
    # ---------------------------------------------------------

    def days_in_month(self, month: int, year: int, is_leap_month: bool = False) -> int:
        return self._month_start(month, year, is_leap_month)[1]

    def month_bounds(self, month: int, year: int, is_leap_month: bool = False) -> Tuple[date, date]:
        start, length = self._month_start(month, year, is_leap_month)
        return from_jdn(start), from_jdn(start + length - 1)

    def new_year_day(self, year: int) -> date:
        return self.to_solar(1, 1, year)

    def leap_month(self, year: int) -> int | None:
        """Number of the month repeated as a leap month in lunar year `year`, or None."""
        self._check_lunar_range(year)
        # Lunar year Y takes months 1..10 from the anchor of Y-1 and 11..12 from its own.
        for base in (year - 1, year):
            a11 = self.lunar_month_11(base)
            if self.lunar_month_11(base + 1) - a11 <= 365:
                continue
            m = self._leap_label(self.leap_month_offset(a11))
            owner = base if m >= 11 else base + 1
            if owner == year:
                return m
        return None

    def solar_term(self, day: int, month: int, year: int) -> int:
        """Solar term index 0..23 (0 = spring equinox) at local midnight."""
        validate_ymd(day, month, year)
        self._check_range(year)
        return self._sun_sector_at_midnight(jdn_from_ymd(day, month, year), 24)

    # ---------------------------------------------------------
    # Day-level API
    # ---------------------------------------------------------

    def info(self) -> Dict[str, Any]:
        return {
            "id": self.id.__dict__,
            "tz_offset_hours": self.tz_offset_hours,
            "min_year": self.spec.min_year,
            "max_year": self.spec.max_year,
        }

    def day_info(self, d: date, *, debug: bool = False) -> DayInfo:
        lunar_date = self.from_solar(d.day, d.month, d.year)
        jdn = to_jdn(d)
        dbg = None
        if debug:
            k = aa.lunation_index(jdn)
            dbg = {
                "k": k,
                "new_moon_jd": lunar.new_moon_jd(k),
                "month_start": from_jdn(jdn - lunar_date.day + 1),
                "sun_sector": self._sun_sector_at_midnight(jdn),
            }
        return DayInfo(civil_date=d, engine=self.id, lunar=lunar_date, jdn=jdn, debug=dbg)
