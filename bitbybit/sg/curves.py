"""Baseline expected-strokes tables and interpolation."""

from __future__ import annotations

import logging
import warnings
from types import MappingProxyType
from typing import Iterable, Mapping, Tuple

from .schemas import LieCategory
from .units import to_canonical

logger = logging.getLogger(__name__)

Curve = Tuple[Tuple[float, float], ...]


class DataIntegrityWarning(UserWarning):
    """A baseline lookup was made for a lie with no table."""


# Putting distances are calibrated in feet and converted to yards below.
_GREEN_POINTS_FT: Curve = (
    (0.33, 1.0),
    (1.0, 1.1),
    (2.0, 1.3),
    (3.0, 1.5),
    (5.0, 1.7),
    (7.0, 1.9),
    (10.0, 2.0),
    (15.0, 2.3),
    (20.0, 2.5),
)

# (yards, expected strokes to hole out), ascending by distance.
_POINTS: dict[LieCategory, Curve] = {
    LieCategory.TEE: (
        (50.0, 2.2),
        (100.0, 2.5),
        (150.0, 2.8),
        (200.0, 3.0),
        (250.0, 3.3),
        (300.0, 3.65),
        (350.0, 3.9),
        (400.0, 4.1),
        (450.0, 4.3),
    ),
    LieCategory.FAIRWAY: (
        (10.0, 0.5),
        (25.0, 1.0),
        (50.0, 1.5),
        (75.0, 1.8),
        (100.0, 2.1),
        (125.0, 2.3),
        (150.0, 2.5),
        (175.0, 2.7),
        (200.0, 2.9),
    ),
    LieCategory.ROUGH: (
        (10.0, 0.8),
        (25.0, 1.3),
        (50.0, 1.8),
        (75.0, 2.1),
        (100.0, 2.4),
        (125.0, 2.6),
        (150.0, 2.8),
        (175.0, 3.0),
        (200.0, 3.2),
    ),
    LieCategory.SAND: (
        (5.0, 0.7),
        (10.0, 1.0),
        (25.0, 1.5),
        (50.0, 2.0),
        (75.0, 2.3),
        (100.0, 2.6),
    ),
    LieCategory.RECOVERY: (
        (10.0, 1.3),
        (25.0, 1.7),
        (50.0, 2.1),
        (75.0, 2.4),
        (100.0, 2.7),
        (150.0, 3.0),
    ),
    LieCategory.GREEN: tuple(
        (to_canonical(LieCategory.GREEN, feet), strokes)
        for feet, strokes in _GREEN_POINTS_FT
    ),
}


def _validate_curve_points(points: Iterable[Tuple[float, float]]) -> None:
    """Ensure distances strictly increase and expectations never decrease."""

    last = None
    for distance, strokes in points:
        if last is not None:
            if distance <= last[0]:
                raise ValueError("Curve distances must be strictly increasing")
            if strokes < last[1]:
                raise ValueError("Expected strokes must not drop as distance grows")
        last = (distance, strokes)


for _lie, _pts in _POINTS.items():
    if len(_pts) < 5:
        raise ValueError(f"baseline for {_lie.value} needs at least 5 points")
    _validate_curve_points(_pts)

BASELINE: Mapping[LieCategory, Curve] = MappingProxyType(_POINTS)


def _interp(points: Curve, x: float) -> float:
    """Piecewise-linear interpolation clamped to the end points."""

    if not points:
        raise ValueError("points must not be empty")

    distance = float(x)

    if distance <= points[0][0]:
        return points[0][1]

    if distance >= points[-1][0]:
        return points[-1][1]

    for (x1, y1), (x2, y2) in zip(points, points[1:]):
        if x1 <= distance <= x2:
            fraction = (distance - x1) / (x2 - x1)
            return y1 + fraction * (y2 - y1)

    return points[-1][1]  # pragma: no cover - unreachable for sorted points


def expected_strokes(lie: LieCategory | str, distance: float) -> float:
    """Expected strokes to hole out from ``distance`` yards on ``lie``."""

    try:
        points = BASELINE[LieCategory(lie)]
    except (KeyError, ValueError):
        logger.warning("no baseline for lie", extra={"lie": lie})
        warnings.warn(
            f"No baseline data for lie: {lie!r}", DataIntegrityWarning, stacklevel=2
        )
        return 0.0

    return _interp(points, distance)


__all__ = ["BASELINE", "DataIntegrityWarning", "expected_strokes"]
