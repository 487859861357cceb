from __future__ import annotations

from ..core.types import ConverterSpec, EngineId


# ============================================================
# CONSTANTS
# ============================================================

# Organization-wide civil offset (Indochina Time, UTC+7).
DEFAULT_TZ_OFFSET = 7
DEFAULT_ENGINE = "vietnam"

# Years for which the closed-form new-moon and solar series are validated
# against published almanac tables.
MIN_YEAR = 1800
MAX_YEAR = 2199


# ============================================================
# NAMED ENGINES
# ============================================================

VIETNAM = ConverterSpec(
    id=EngineId("vietnamese", "vietnam", "1.0"),
    tz_offset_hours=DEFAULT_TZ_OFFSET,
    min_year=MIN_YEAR,
    max_year=MAX_YEAR,
    meta={"description": "Vietnamese am lich, civil day at UTC+7"},
)

CHINA = ConverterSpec(
    id=EngineId("chinese", "china", "1.0"),
    tz_offset_hours=8,
    min_year=MIN_YEAR,
    max_year=MAX_YEAR,
    meta={"description": "Chinese nongli, civil day at UTC+8"},
)

ALL_SPECS = {
    "vietnam": VIETNAM,
    "china": CHINA,
}


def custom_spec(tz_offset_hours: int) -> ConverterSpec:
    """Vietnam rules on another UTC offset."""
    return VIETNAM.tweak(
        id=EngineId("custom", f"utc{tz_offset_hours:+d}", VIETNAM.id.version),
        tz_offset_hours=tz_offset_hours,
        meta={"description": f"civil day at UTC{tz_offset_hours:+d}"},
    )
