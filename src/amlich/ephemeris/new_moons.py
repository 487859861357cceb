# ephemeris/new_moons.py
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List

from . import DEFAULT_KERNEL, require_ephemeris

logger = logging.getLogger(__name__)


@dataclass
class SkyfieldNewMoons:
    """
    True new moons (UT Julian Dates) from a JPL kernel via skyfield's
    moon_phases almanac.

    Requires optional deps:
      pip install "amlich[ephemeris]"
    """
    ts: object
    eph: object

    @classmethod
    def load(cls, kernel: str = DEFAULT_KERNEL) -> "SkyfieldNewMoons":
        require_ephemeris()
        from skyfield.api import load

        logger.info("loading ephemeris kernel %s", kernel)
        return cls(ts=load.timescale(), eph=load(kernel))

    def between(self, year_start: int, year_end: int) -> List[float]:
        """New moons from Jan 1 of year_start up to (excluding) Jan 1 of year_end + 1."""
        from skyfield import almanac

        t0 = self.ts.utc(year_start, 1, 1)
        t1 = self.ts.utc(year_end + 1, 1, 1)
        times, phases = almanac.find_discrete(t0, t1, almanac.moon_phases(self.eph))
        return [float(t.ut1) for t, phase in zip(times, phases) if phase == 0]


def local_day(jd_ut: float, tz_offset_hours: int) -> int:
    """Civil JDN holding the instant jd_ut at UTC+tz_offset_hours."""
    return math.floor(jd_ut + 0.5 + tz_offset_hours / 24.0)
