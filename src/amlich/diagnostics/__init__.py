"""Diagnostics package.

- diagnostics: always available, light-weight checks (no ephemeris)
- diagnostics.ephem: optional (requires ephemeris extras + a JPL kernel)
"""

from ..core.errors import EngineUnavailableError

__all__ = ["pretty_month", "new_years_table", "round_trip", "leap_months", "need_numpy", "need_matplotlib"]


def need_numpy():
    try:
        import numpy as np
        return np
    except ImportError as e:
        raise EngineUnavailableError('Need numpy. Install: pip install "amlich[diagnostics]"') from e


def need_matplotlib():
    try:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise EngineUnavailableError('Need matplotlib. Install: pip install "amlich[diagnostics]"') from e
