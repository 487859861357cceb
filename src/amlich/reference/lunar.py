# reference/lunar.py

from __future__ import annotations

import math

from . import astro_args as aa


# Periodic corrections to the mean new moon (Meeus, Astronomical Algorithms,
# ch. 49, abridged): (coef, coef per century T, m, m', f) where the argument
# is m*M + m'*M' + f*F.
NEW_MOON_TERMS = (
    (0.1734, -0.000393, 1, 0, 0),
    (0.0021, 0.0, 2, 0, 0),
    (-0.4068, 0.0, 0, 1, 0),
    (0.0161, 0.0, 0, 2, 0),
    (-0.0004, 0.0, 0, 3, 0),
    (0.0104, 0.0, 0, 0, 2),
    (-0.0051, 0.0, 1, 1, 0),
    (-0.0074, 0.0, 1, -1, 0),
    (0.0004, 0.0, 1, 0, 2),
    (-0.0004, 0.0, -1, 0, 2),
    (-0.0006, 0.0, 0, 1, 2),
    (0.0010, 0.0, 0, -1, 2),
    (0.0005, 0.0, 1, 2, 0),
)


def mean_new_moon_jd(k: int) -> float:
    """JD of the k-th mean new moon after 1900-01-01, with the small secular term."""
    T = aa.T_from_lunation(k)
    T2 = T * T
    T3 = T2 * T
    jd = 2415020.75933 + 29.53058868 * k + 0.0001178 * T2 - 0.000000155 * T3
    return jd + 0.00033 * math.sin((166.56 + 132.87 * T - 0.009173 * T2) * aa.DR)


def delta_t_days(T: float) -> float:
    """Approximate TT - UT in days, T in centuries from 1900.0."""
    T2 = T * T
    T3 = T2 * T
    if T < -11:
        return 0.001 + 0.000839 * T + 0.0002261 * T2 - 0.00000845 * T3 - 0.000000081 * T * T3
    return -0.000278 + 0.000265 * T + 0.000262 * T2


def new_moon_jd(k: int) -> float:
    """
    Julian Date (UT) of the k-th true new moon after 1900-01-01.

    Mean lunation plus the NEW_MOON_TERMS corrections built from the sun's
    mean anomaly M, the moon's mean anomaly M' and the moon's argument of
    latitude F, less ΔT.
    """
    T = aa.T_from_lunation(k)
    T2 = T * T
    T3 = T2 * T

    M = 359.2242 + 29.10535608 * k - 0.0000333 * T2 - 0.00000347 * T3
    Mp = 306.0253 + 385.81691806 * k + 0.0107306 * T2 + 0.00001236 * T3
    F = 21.2964 + 390.67050646 * k - 0.0016528 * T2 - 0.00000239 * T3

    corr = 0.0
    for coef, coef_t, m, mp, f in NEW_MOON_TERMS:
        arg = (m * M + mp * Mp + f * F) * aa.DR
        corr += (coef + coef_t * T) * math.sin(arg)

    return mean_new_moon_jd(k) + corr - delta_t_days(T)
