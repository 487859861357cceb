from __future__ import annotations

import threading
from dataclasses import replace
from datetime import date
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .attributes import standard as _standard  # noqa: F401  (registers built-in attributes)
from .attributes.registry import compute_attributes
from .cache import DEFAULT_CACHE_CAPACITY, LunarDateCache
from .core.engine import CalendarEngine, EngineRegistry
from .core.types import ConverterSpec, DayInfo, LunarDate
from .engines.factory import make_engine as _make_engine
from .engines.specs import DEFAULT_ENGINE, DEFAULT_TZ_OFFSET, custom_spec

_registry: Optional[EngineRegistry] = None
_default_cache: Optional[LunarDateCache] = None

# Engines built on demand for offsets no registered engine uses.
_offset_engines: Dict[int, CalendarEngine] = {}
_offset_lock = threading.Lock()


def set_registry(reg: EngineRegistry) -> None:
    global _registry
    _registry = reg
    with _offset_lock:
        _offset_engines.clear()

def _reg() -> EngineRegistry:
    if _registry is None:
        raise RuntimeError("Engine registry not initialized")
    return _registry

def list_engines() -> List[str]:
    return _reg().list()

def engine_info(engine: str) -> Dict[str, Any]:
    return _reg().get(engine).info()

def get_engine(engine: str = DEFAULT_ENGINE) -> CalendarEngine:
    return _reg().get(engine)

def make_engine(spec: ConverterSpec) -> CalendarEngine:
    return _make_engine(spec)

def register_engine(name: str, engine: CalendarEngine, *, overwrite: bool = False) -> None:
    _reg().register(name, engine, overwrite=overwrite)

def engine_for_offset(tz_offset_hours: int) -> CalendarEngine:
    """Registered engine for this UTC offset, else a Vietnam-rules engine built for it."""
    eng = _reg().find_by_offset(tz_offset_hours)
    if eng is not None:
        return eng
    with _offset_lock:
        if tz_offset_hours not in _offset_engines:
            _offset_engines[tz_offset_hours] = _make_engine(custom_spec(tz_offset_hours))
        return _offset_engines[tz_offset_hours]

# ============================================================
# Conversion
# ============================================================

def convert_solar_to_lunar(day: int, month: int, year: int, tz_offset_hours: int = DEFAULT_TZ_OFFSET) -> LunarDate:
    """
    Lunar date of the civil day (day, month, year) at UTC+tz_offset_hours.

    Raises InvalidDateError for a malformed date and OutOfRangeError for a
    year outside the supported range.
    """
    return engine_for_offset(tz_offset_hours).from_solar(day, month, year)

def convert_lunar_to_solar(
    day: int,
    month: int,
    year: int,
    is_leap_month: bool = False,
    tz_offset_hours: int = DEFAULT_TZ_OFFSET,
) -> date:
    return engine_for_offset(tz_offset_hours).to_solar(day, month, year, is_leap_month)

def day_info(
    d: date,
    *,
    engine: str = DEFAULT_ENGINE,
    attributes: Sequence[str] = (),
    debug: bool = False,
) -> DayInfo:
    eng = _reg().get(engine)
    info = eng.day_info(d, debug=debug)
    if attributes:
        attrs = compute_attributes(info, eng, attributes)
        info = replace(info, attributes=attrs)
    return info

# ============================================================
# Month / year helpers
# ============================================================

def leap_month(year: int, *, engine: str = DEFAULT_ENGINE) -> Optional[int]:
    return _reg().get(engine).leap_month(year)

def new_year_day(year: int, *, engine: str = DEFAULT_ENGINE) -> date:
    return _reg().get(engine).new_year_day(year)

def month_bounds(month: int, year: int, *, is_leap_month: bool = False, engine: str = DEFAULT_ENGINE) -> Tuple[date, date]:
    return _reg().get(engine).month_bounds(month, year, is_leap_month)

def days_in_month(month: int, year: int, *, is_leap_month: bool = False, engine: str = DEFAULT_ENGINE) -> int:
    return _reg().get(engine).days_in_month(month, year, is_leap_month)

def solar_term(d: date, *, engine: str = DEFAULT_ENGINE) -> int:
    return _reg().get(engine).solar_term(d.day, d.month, d.year)

# ============================================================
# Memoized lookups
# ============================================================

def set_default_cache(cache: LunarDateCache) -> None:
    global _default_cache
    _default_cache = cache

def default_cache() -> LunarDateCache:
    global _default_cache
    if _default_cache is None:
        _default_cache = LunarDateCache(get_engine(DEFAULT_ENGINE), capacity=DEFAULT_CACHE_CAPACITY)
    return _default_cache

def get_lunar_date_cached(day: int, month: int, year: int) -> LunarDate:
    """convert_solar_to_lunar at the default offset, through the shared cache."""
    return default_cache().get(day, month, year)

def clear_cache() -> None:
    default_cache().clear()
