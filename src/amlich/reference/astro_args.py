from __future__ import annotations

import math


# ------------------------------------------------------------
# Units & helpers
# ------------------------------------------------------------

DR = math.pi / 180.0   # degrees -> radians
TAU = 2.0 * math.pi


def wrap_rad(x_rad: float) -> float:
    """Wrap radians to [0, 2*pi)."""
    return x_rad - TAU * math.floor(x_rad / TAU)


def wrap_deg(x_deg: float) -> float:
    """Wrap degrees to [0,360)."""
    return x_deg - 360.0 * math.floor(x_deg / 360.0)


# ------------------------------------------------------------
# Time variables
# ------------------------------------------------------------

J2000 = 2451545.0  # JD at J2000.0

# Epoch of the lunation count used by the new-moon series: the mean new
# moon of 1900 January 0.5 (k = 0).
JD_LUNATION_EPOCH = 2415021.076998695

# Mean synodic month (days).
SYNODIC_MONTH = 29.530588853


def T_centuries(jd: float) -> float:
    """Julian centuries from J2000.0."""
    return (jd - J2000) / 36525.0


def T_from_lunation(k: float) -> float:
    """Julian centuries from 1900.0 for lunation k (1236.85 lunations per century)."""
    return k / 1236.85


def lunation_index(jd: float) -> int:
    """Index k of the last mean new moon at or before jd (1900-based count)."""
    return math.floor((jd - JD_LUNATION_EPOCH) / SYNODIC_MONTH)


def nearest_lunation_index(jd: float) -> int:
    return math.floor((jd - JD_LUNATION_EPOCH) / SYNODIC_MONTH + 0.5)


def synodic_month_days(T: float) -> float:
    """
    Mean synodic month length in days (ELP2000/Meeus polynomial, T from J2000.0):
      29.5305888531 + 2.1621e-7 T - 3.64e-10 T^2
    """
    return 29.5305888531 + 2.1621e-7 * T - 3.64e-10 * (T * T)


def tropical_year_days(T: float) -> float:
    """Mean tropical year length in days (Laskar-style polynomial, T from J2000.0)."""
    return (
        365.2421896698
        - 6.15359e-6 * T
        - 7.29e-10 * (T * T)
        + 2.64e-10 * (T * T * T)
    )


def solar_term_days(T: float) -> float:
    """Mean spacing of the 24 solar terms (~15.2184 days)."""
    return tropical_year_days(T) / 24.0
