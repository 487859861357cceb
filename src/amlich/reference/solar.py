# reference/solar.py

from __future__ import annotations

import math

from . import astro_args as aa


SOLAR_TERM_NAMES = (
    "Xuân phân", "Thanh minh", "Cốc vũ", "Lập hạ", "Tiểu mãn", "Mang chủng",
    "Hạ chí", "Tiểu thử", "Đại thử", "Lập thu", "Xử thử", "Bạch lộ",
    "Thu phân", "Hàn lộ", "Sương giáng", "Lập đông", "Tiểu tuyết", "Đại tuyết",
    "Đông chí", "Tiểu hàn", "Đại hàn", "Lập xuân", "Vũ thủy", "Kinh trập",
)


def sun_longitude(jd: float) -> float:
    """
    True geometric solar longitude in radians, wrapped to [0, 2*pi).

    Mean longitude L0 plus the three-term equation of center (~0.01 deg).
    """
    T = aa.T_centuries(jd)
    T2 = T * T
    M = 357.52910 + 35999.05030 * T - 0.0001559 * T2 - 0.00000048 * T * T2
    L0 = 280.46645 + 36000.76983 * T + 0.0003032 * T2
    C = (1.914600 - 0.004817 * T - 0.000014 * T2) * math.sin(aa.DR * M)
    C += (0.019993 - 0.000101 * T) * math.sin(aa.DR * 2 * M) + 0.000290 * math.sin(aa.DR * 3 * M)
    return aa.wrap_rad((L0 + C) * aa.DR)


def sun_sector(jd: float, sectors: int = 12) -> int:
    """
    Index of the equal sector of the ecliptic holding the sun at jd.

    sectors=12 gives 30-degree signs (sector 9 starts at the winter solstice);
    sectors=24 gives the solar terms, 0 = spring equinox.
    """
    return math.floor(sun_longitude(jd) / math.pi * (sectors // 2))
