"""Ephemeris adapters/providers (optional).

Thin wrappers around skyfield, used to check the closed-form new moons
against a JPL kernel. Install with:
  pip install "amlich[ephemeris]"
"""

from ..core.errors import EngineUnavailableError

DEFAULT_KERNEL = "de421.bsp"


def require_ephemeris():
    """Raise a clear error if ephemeris extras aren't installed."""
    try:
        import skyfield  # noqa: F401
    except ImportError as e:
        raise EngineUnavailableError('Ephemeris support requires: pip install "amlich[ephemeris]"') from e
