"""Pure strokes-gained computation helpers."""

from __future__ import annotations

from typing import Optional

from .curves import expected_strokes
from .schemas import LieCategory, Shot

SG_DECIMALS = 2


def _shot_delta(
    lie_before: LieCategory,
    distance_before: float,
    lie_after: Optional[LieCategory] = None,
    distance_after: float = 0.0,
) -> float:
    before_expectation = expected_strokes(lie_before, distance_before)

    # A missing successor means the ball was holed: nothing left to play.
    if lie_after is None:
        after_expectation = 0.0
    else:
        after_expectation = expected_strokes(lie_after, distance_after)

    return before_expectation - (1.0 + after_expectation)


def shot_strokes_gained(shot: Shot, next_shot: Optional[Shot] = None) -> float:
    """Strokes gained by ``shot``, judged by where ``next_shot`` starts.

    Pass ``next_shot=None`` for the stroke that holed out. Positive values beat
    the baseline, negative values lose to it.
    """

    if next_shot is None:
        delta = _shot_delta(shot.lie, shot.distance_to_hole)
    else:
        delta = _shot_delta(
            shot.lie,
            shot.distance_to_hole,
            next_shot.lie,
            next_shot.distance_to_hole,
        )
    return round(delta, SG_DECIMALS)


def holed_strokes_gained(lie: LieCategory, distance: float) -> float:
    """Strokes gained by holing out in one from ``distance`` yards on ``lie``."""

    return round(_shot_delta(lie, distance), SG_DECIMALS)


__all__ = ["SG_DECIMALS", "holed_strokes_gained", "shot_strokes_gained"]
