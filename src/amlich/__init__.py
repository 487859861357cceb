"""amlich public API.

Keep this surface small: users should mostly interact with functions re-exported here.
"""

import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

# Initialize registry on import
from . import api_init as _api_init  # noqa: F401,E402

from .api import (  # noqa: E402
    convert_solar_to_lunar,
    convert_lunar_to_solar,
    day_info,
    list_engines,
    engine_info,
    get_engine,
    make_engine,
    register_engine,
    engine_for_offset,
    leap_month,
    new_year_day,
    month_bounds,
    days_in_month,
    solar_term,
    set_default_cache,
    default_cache,
    get_lunar_date_cached,
    clear_cache,
)
from .cache import LunarDateCache  # noqa: E402
from .core.errors import AmlichError, EngineUnavailableError, InvalidDateError, OutOfRangeError  # noqa: E402
from .core.types import ConverterSpec, DayInfo, LunarDate, SolarDate  # noqa: E402
from .grid import CalendarCell, month_grid  # noqa: E402
from .rules.vegetarian import (  # noqa: E402
    AuditReport,
    VegetarianDateSet,
    VegetarianSummary,
    audit_registrations,
    classify_dates,
    filter_vegetarian_claims,
    is_vegetarian_day,
    is_vegetarian_lunar_day,
    vegetarian_days,
)

__all__ = [
    "convert_solar_to_lunar",
    "convert_lunar_to_solar",
    "day_info",
    "list_engines",
    "engine_info",
    "get_engine",
    "make_engine",
    "register_engine",
    "engine_for_offset",
    "leap_month",
    "new_year_day",
    "month_bounds",
    "days_in_month",
    "solar_term",
    "set_default_cache",
    "default_cache",
    "get_lunar_date_cached",
    "clear_cache",
    "LunarDateCache",
    "AmlichError",
    "EngineUnavailableError",
    "InvalidDateError",
    "OutOfRangeError",
    "ConverterSpec",
    "DayInfo",
    "LunarDate",
    "SolarDate",
    "CalendarCell",
    "month_grid",
    "AuditReport",
    "VegetarianDateSet",
    "VegetarianSummary",
    "audit_registrations",
    "classify_dates",
    "filter_vegetarian_claims",
    "is_vegetarian_day",
    "is_vegetarian_lunar_day",
    "vegetarian_days",
]
