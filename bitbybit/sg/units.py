"""Conversion between display units and canonical yards.

Green distances are entered and shown in feet; every other lie uses yards.
Everything stored on a :class:`~bitbybit.sg.schemas.Shot` and every baseline
lookup is in yards.
"""

from __future__ import annotations

import math

from .schemas import LieCategory

FEET_PER_YARD = 3.0


def unit_ratio(lie: LieCategory) -> float:
    """Display units per canonical yard for ``lie``."""

    if LieCategory(lie) is LieCategory.GREEN:
        return FEET_PER_YARD
    return 1.0


def to_canonical(lie: LieCategory, display_value: float) -> float:
    return float(display_value) / unit_ratio(lie)


def to_display(lie: LieCategory, canonical_value: float) -> float:
    return float(canonical_value) * unit_ratio(lie)


def display_unit(lie: LieCategory) -> str:
    return "ft" if LieCategory(lie) is LieCategory.GREEN else "yds"


def format_distance(lie: LieCategory, canonical_value: float) -> str:
    display = to_display(lie, canonical_value)
    if LieCategory(lie) is LieCategory.GREEN:
        return f"{math.floor(display + 0.5)} ft"
    return f"{display:g} yds"


__all__ = [
    "FEET_PER_YARD",
    "display_unit",
    "format_distance",
    "to_canonical",
    "to_display",
    "unit_ratio",
]
