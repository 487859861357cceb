from __future__ import annotations
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List, Optional, Protocol, Tuple

from .types import DayInfo, EngineId, LunarDate


class CalendarEngine(Protocol):
    id: EngineId
    tz_offset_hours: int

    def info(self) -> Dict[str, Any]: ...
    def from_solar(self, day: int, month: int, year: int) -> LunarDate: ...
    def to_solar(self, day: int, month: int, year: int, is_leap_month: bool = False) -> date: ...
    def day_info(self, d: date, *, debug: bool = False) -> DayInfo: ...

    def leap_month(self, year: int) -> Optional[int]: ...
    def new_year_day(self, year: int) -> date: ...
    def month_bounds(self, month: int, year: int, is_leap_month: bool = False) -> Tuple[date, date]: ...
    def days_in_month(self, month: int, year: int, is_leap_month: bool = False) -> int: ...
    def solar_term(self, day: int, month: int, year: int) -> int: ...


@dataclass
class EngineRegistry:
    _engines: Dict[str, CalendarEngine]

    def get(self, name: str) -> CalendarEngine:
        if name not in self._engines:
            raise KeyError(f"Unknown engine '{name}'. Available: {sorted(self._engines)}")
        return self._engines[name]

    def list(self) -> List[str]:
        return sorted(self._engines.keys())

    def register(self, name: str, engine: CalendarEngine, *, overwrite: bool = False) -> None:
        if (not overwrite) and (name in self._engines):
            raise KeyError(f"Engine '{name}' already exists. Use overwrite=True to replace.")
        self._engines[name] = engine

    def find_by_offset(self, tz_offset_hours: int) -> CalendarEngine | None:
        """First registered engine (by name) whose civil day uses this UTC offset."""
        for name in self.list():
            eng = self._engines[name]
            if eng.tz_offset_hours == tz_offset_hours:
                return eng
        return None
