"""
amlich.rules.vegetarian
-----------------------
House rule: a vegetarian meal day is a solar date whose lunar day is the
1st or the 15th.

Every consumer (calendar rendering, registration validation, bulk admin
tools, data audits) goes through this module so the rule has one
definition.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Set, Union

from ..core.errors import InvalidDateError, OutOfRangeError
from ..core.time import DateLike, coerce_ymd, date_key, days_in_solar_month, validate_ymd
from ..core.types import LunarDate, SolarDate
from ..engines.specs import DEFAULT_TZ_OFFSET

logger = logging.getLogger(__name__)

VEGETARIAN_LUNAR_DAYS = frozenset({1, 15})

_TRUE_FLAGS = {"1", "true", "t", "yes", "y", "x"}


def _engine(tz_offset_hours: int):
    from ..api import engine_for_offset
    return engine_for_offset(tz_offset_hours)


def _resolve_tz(d: DateLike, tz_offset_hours: Optional[int]) -> int:
    if tz_offset_hours is not None:
        return tz_offset_hours
    if isinstance(d, SolarDate) and d.tz_offset_hours is not None:
        return d.tz_offset_hours
    return DEFAULT_TZ_OFFSET


def is_vegetarian_lunar_day(lunar_day: int) -> bool:
    return lunar_day in VEGETARIAN_LUNAR_DAYS


def lunar_date_of(d: DateLike, tz_offset_hours: Optional[int] = None) -> LunarDate:
    day, month, year = coerce_ymd(d)
    return _engine(_resolve_tz(d, tz_offset_hours)).from_solar(day, month, year)


def is_vegetarian_day(d: DateLike, tz_offset_hours: Optional[int] = None) -> bool:
    """
    True iff the lunar day of `d` is 1 or 15.

    Raises InvalidDateError / OutOfRangeError instead of answering False.
    """
    return is_vegetarian_lunar_day(lunar_date_of(d, tz_offset_hours).day)


def vegetarian_days(year: int, month: int, tz_offset_hours: Optional[int] = None) -> List[date]:
    """All vegetarian days of one solar month, in order."""
    validate_ymd(1, month, year)
    eng = _engine(DEFAULT_TZ_OFFSET if tz_offset_hours is None else tz_offset_hours)
    out = []
    for day in range(1, days_in_solar_month(month, year) + 1):
        if is_vegetarian_lunar_day(eng.from_solar(day, month, year).day):
            out.append(date(year, month, day))
    return out


# ============================================================
# Registration validation (untrusted client input)
# ============================================================

Claims = Union[Mapping[Any, Any], Iterable[Any]]


def filter_vegetarian_claims(claims: Claims, tz_offset_hours: Optional[int] = None) -> Set[str]:
    """
    Re-derive vegetarian eligibility for client-submitted dates.

    `claims` is a mapping date -> flag (only flags that are exactly True
    count as claims), an iterable of dates, or one date string. Returns the
    normalized "YYYY-MM-DD" keys that are claimed and really are vegetarian days.
    Anything else is dropped, including dates that cannot be converted.
    """
    if isinstance(claims, Mapping):
        candidates = [k for k, v in claims.items() if v is True]
    elif isinstance(claims, str):
        candidates = [claims]
    else:
        candidates = list(claims)

    eng = _engine(DEFAULT_TZ_OFFSET if tz_offset_hours is None else tz_offset_hours)
    accepted: Set[str] = set()
    for raw in candidates:
        try:
            day, month, year = coerce_ymd(raw)
            lunar_day = eng.from_solar(day, month, year).day
        except (InvalidDateError, OutOfRangeError) as e:
            logger.debug("dropped vegetarian claim %r: %s", raw, e)
            continue
        if not is_vegetarian_lunar_day(lunar_day):
            logger.debug("dropped vegetarian claim %r: lunar day %d", raw, lunar_day)
            continue
        accepted.add(date_key(day, month, year))
    return accepted


class VegetarianDateSet:
    """
    One employee's vegetarian dates, as "YYYY-MM-DD" keys.

    Membership is guarded: only vegetarian days can be added.
    """
    def __init__(self, dates: Iterable[DateLike] = (), *, tz_offset_hours: int = DEFAULT_TZ_OFFSET):
        self.tz_offset_hours = tz_offset_hours
        self._keys: Set[str] = set()
        for d in dates:
            self.add(d)

    @classmethod
    def from_claims(cls, claims: Claims, *, tz_offset_hours: int = DEFAULT_TZ_OFFSET) -> "VegetarianDateSet":
        """Build from untrusted input, silently dropping ineligible dates."""
        out = cls(tz_offset_hours=tz_offset_hours)
        out._keys = filter_vegetarian_claims(claims, tz_offset_hours)
        return out

    @staticmethod
    def _key(d: DateLike) -> str:
        day, month, year = coerce_ymd(d)
        return date_key(day, month, year)

    def add(self, d: DateLike) -> None:
        key = self._key(d)
        if not is_vegetarian_day(key, self.tz_offset_hours):
            raise ValueError(f"{key} is not a vegetarian day")
        self._keys.add(key)

    def discard(self, d: DateLike) -> None:
        self._keys.discard(self._key(d))

    def toggle(self, d: DateLike) -> bool:
        """Flip membership; returns the new state."""
        key = self._key(d)
        if key in self._keys:
            self._keys.discard(key)
            return False
        self.add(key)
        return True

    def to_claims(self) -> Dict[str, bool]:
        return {k: True for k in sorted(self._keys)}

    def __contains__(self, d: object) -> bool:
        try:
            return self._key(d) in self._keys  # type: ignore[arg-type]
        except InvalidDateError:
            return False

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._keys))

    def __len__(self) -> int:
        return len(self._keys)

    def __repr__(self) -> str:
        return f"VegetarianDateSet({sorted(self._keys)!r}, tz_offset_hours={self.tz_offset_hours})"


# ============================================================
# Bulk admin gate
# ============================================================

@dataclass(frozen=True)
class VegetarianSummary:
    vegetarian: List[str]
    normal: List[str]

    @property
    def all_vegetarian(self) -> bool:
        """The "mark as vegetarian" option is offered only when every selected date qualifies."""
        return bool(self.vegetarian) and not self.normal


def classify_dates(dates: Iterable[DateLike], tz_offset_hours: Optional[int] = None) -> VegetarianSummary:
    eng = _engine(DEFAULT_TZ_OFFSET if tz_offset_hours is None else tz_offset_hours)
    veg: List[str] = []
    normal: List[str] = []
    for d in dates:
        day, month, year = coerce_ymd(d)
        key = date_key(day, month, year)
        if is_vegetarian_lunar_day(eng.from_solar(day, month, year).day):
            veg.append(key)
        else:
            normal.append(key)
    return VegetarianSummary(vegetarian=veg, normal=normal)


# ============================================================
# Stored data audit
# ============================================================

def parse_flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in _TRUE_FLAGS


@dataclass(frozen=True)
class AuditFinding:
    record: Mapping[str, Any]
    reason: str


@dataclass
class AuditReport:
    valid: List[Mapping[str, Any]] = field(default_factory=list)
    invalid: List[AuditFinding] = field(default_factory=list)

    @property
    def checked(self) -> int:
        return len(self.valid) + len(self.invalid)


def audit_registrations(records: Iterable[Mapping[str, Any]], tz_offset_hours: Optional[int] = None) -> AuditReport:
    """
    Check stored registrations flagged vegetarian against the lunar rule.

    Each record needs `registration_date` (date or "YYYY-MM-DD") and
    `is_vegetarian`. Unflagged records are skipped.
    """
    eng = _engine(DEFAULT_TZ_OFFSET if tz_offset_hours is None else tz_offset_hours)
    report = AuditReport()
    for rec in records:
        if not parse_flag(rec.get("is_vegetarian")):
            continue
        raw = rec.get("registration_date")
        try:
            day, month, year = coerce_ymd(raw.strip() if isinstance(raw, str) else raw)
            lunar_date = eng.from_solar(day, month, year)
        except (InvalidDateError, OutOfRangeError) as e:
            report.invalid.append(AuditFinding(rec, f"unconvertible date: {e}"))
            continue
        if is_vegetarian_lunar_day(lunar_date.day):
            report.valid.append(rec)
        else:
            report.invalid.append(AuditFinding(rec, f"lunar {lunar_date.label} is not a vegetarian day"))
    logger.info("audited %d vegetarian registrations, %d invalid", report.checked, len(report.invalid))
    return report
