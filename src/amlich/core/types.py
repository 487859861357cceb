from __future__ import annotations
from dataclasses import dataclass, replace
from datetime import date
from typing import Any, Dict, Literal, Optional


@dataclass(frozen=True)
class EngineId:
    family: Literal["vietnamese", "chinese", "custom"]
    name: str
    version: str


@dataclass(frozen=True)
class SolarDate:
    """Gregorian (year, month, day); tz_offset_hours overrides the caller's default offset."""
    year: int
    month: int
    day: int
    tz_offset_hours: Optional[int] = None

    @classmethod
    def from_date(cls, d: date, tz_offset_hours: Optional[int] = None) -> "SolarDate":
        return cls(d.year, d.month, d.day, tz_offset_hours)

    def to_date(self) -> date:
        return date(self.year, self.month, self.day)


@dataclass(frozen=True)
class LunarDate:
    day: int          # 1..30
    month: int        # 1..12
    is_leap_month: bool
    year: int

    @property
    def label(self) -> str:
        return f"{self.day}/{self.month}"


@dataclass(frozen=True)
class DayInfo:
    civil_date: date
    engine: EngineId
    lunar: LunarDate
    jdn: int
    attributes: Optional[Dict[str, Any]] = None
    debug: Optional[Dict[str, Any]] = None


@dataclass(frozen=True)
class ConverterSpec:
    """Pure data payload for constructing a lunisolar engine."""
    id: EngineId
    tz_offset_hours: int
    min_year: int = 1800
    max_year: int = 2199
    meta: Optional[Dict[str, Any]] = None

    def __post_init__(self) -> None:
        tz = self.tz_offset_hours
        if isinstance(tz, bool) or not isinstance(tz, int) or not -12 <= tz <= 14:
            raise ValueError(f"tz_offset_hours must be an integer in [-12, 14], got {tz!r}")
        if self.min_year > self.max_year:
            raise ValueError("min_year must be <= max_year")

    @staticmethod
    def like(name: str) -> "ConverterSpec":
        from ..engines.specs import ALL_SPECS
        if name not in ALL_SPECS:
            raise KeyError(f"Unknown base spec '{name}'. Available: {sorted(ALL_SPECS)}")
        return ALL_SPECS[name]

    def tweak(self, **kwargs) -> "ConverterSpec":
        return replace(self, **kwargs)
