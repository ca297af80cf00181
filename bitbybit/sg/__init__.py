"""Strokes gained core package."""

from .curves import BASELINE, DataIntegrityWarning, expected_strokes  # noqa: F401
from .engine import holed_strokes_gained, shot_strokes_gained  # noqa: F401
from .schemas import LieCategory, Shot  # noqa: F401
from .units import (  # noqa: F401
    display_unit,
    format_distance,
    to_canonical,
    to_display,
    unit_ratio,
)
