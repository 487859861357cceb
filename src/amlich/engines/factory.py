"""
amlich.engines.factory
----------------------
Turns ConverterSpec payloads into live engine objects.
"""

from __future__ import annotations
from amlich.core.types import ConverterSpec
from amlich.engines.lunisolar import LunisolarEngine


def make_engine(spec: ConverterSpec) -> LunisolarEngine:
    """The universal entry point."""
    if not isinstance(spec, ConverterSpec):
        raise TypeError(f"Unknown spec type: {type(spec)}")
    return LunisolarEngine(spec)
