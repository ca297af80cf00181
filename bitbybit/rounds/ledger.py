"""Per-hole shot ledger.

The ledger owns the ordered shots of one hole while it is being played. Every
mutation chains distances between neighbouring shots and recomputes strokes
gained across the whole hole, since a shot's value depends on where the next
one starts. Mutations build a new shot tuple and only swap it in once it is
complete, so a rejected operation leaves the ledger exactly as it was.

Distances on shots are always yards. Green distances arrive in feet and are
converted at the edge of :meth:`ShotLedger.add_shot` and
:meth:`ShotLedger.edit_shot`.
"""

from __future__ import annotations

import logging
import math
from enum import Enum
from typing import Iterable, Optional, Sequence, Tuple

from bitbybit.courses.models import PAR_OPTIONS, Hole
from bitbybit.sg.engine import shot_strokes_gained
from bitbybit.sg.schemas import LieCategory, Shot
from bitbybit.sg.units import to_canonical

logger = logging.getLogger(__name__)


class LedgerError(Exception):
    pass


class ShotValidationError(LedgerError, ValueError):
    pass


class LedgerPreconditionError(LedgerError):
    pass


class HoleState(str, Enum):
    NO_HOLE_DATA = "no_hole_data"
    AWAITING_FIRST_SHOT = "awaiting_first_shot"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


def parse_distance(value: object, *, allow_zero: bool = True) -> float:
    """Parse user-entered distance text or numbers."""

    if value is None or isinstance(value, bool):
        raise ShotValidationError("Please enter a valid distance")
    if isinstance(value, str):
        value = value.strip()
        if not value:
            raise ShotValidationError("Please enter a valid distance")
    try:
        distance = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        raise ShotValidationError("Please enter a valid distance") from None

    if not math.isfinite(distance) or distance < 0:
        raise ShotValidationError("Please enter a valid distance")
    if not allow_zero and distance == 0:
        raise ShotValidationError("Please enter a valid distance")
    return distance


def parse_lie(value: object) -> LieCategory:
    if value is None or value == "":
        raise ShotValidationError("Please select a lie")
    try:
        return LieCategory(value)
    except ValueError:
        raise ShotValidationError(f"Unknown lie: {value!r}") from None


def distance_traveled(shot: Shot, next_shot: Shot) -> float:
    """Yards covered between two consecutive shots, never negative."""

    return max(0.0, shot.distance_to_hole - next_shot.distance_to_hole)


def recompute_strokes_gained(
    shots: Sequence[Shot], *, hole_completed: bool
) -> Tuple[Shot, ...]:
    """Return copies of ``shots`` with strokes gained filled in.

    Every shot but the last is judged against its successor. The last shot is
    judged as holed when the hole is completed and left empty otherwise.
    """

    last_index = len(shots) - 1
    updated = []
    for index, shot in enumerate(shots):
        if index < last_index:
            value: Optional[float] = shot_strokes_gained(shot, shots[index + 1])
        elif hole_completed:
            value = shot_strokes_gained(shot, None)
        else:
            value = None
        updated.append(shot.model_copy(update={"strokes_gained": value}))
    return tuple(updated)


class ShotLedger:
    def __init__(
        self,
        hole_number: int,
        shots: Iterable[Shot] = (),
        *,
        hole: Hole | None = None,
    ) -> None:
        if hole_number < 1:
            raise ValueError("hole_number must be positive")
        if hole is not None and hole.number != hole_number:
            raise ValueError(
                f"hole data is for hole {hole.number}, not {hole_number}"
            )
        self._hole_number = hole_number
        self._hole = hole if hole is not None and hole.is_configured else None

        loaded = sorted(shots, key=lambda s: s.shot_number)
        for shot in loaded:
            if shot.hole_number != hole_number:
                raise ValueError(
                    f"shot {shot.id} belongs to hole {shot.hole_number}, "
                    f"not {hole_number}"
                )
        numbers = [shot.shot_number for shot in loaded]
        if numbers != list(range(1, len(loaded) + 1)):
            raise ValueError(f"shot numbers {numbers} are not contiguous from 1")
        if any(not shot.completed for shot in loaded[:-1]):
            raise ValueError("only the last shot of a hole may be open")

        self._shots: Tuple[Shot, ...] = ()
        if loaded:
            # Derived fields are rebuilt from the stored distances.
            chained = self._rechain(list(loaded), range(len(loaded)))
            self._shots = recompute_strokes_gained(
                chained, hole_completed=chained[-1].completed
            )

        if not self._shots and self._hole is not None:
            self._shots = (self._tee_shot(self._hole.distance),)

    # State
    @property
    def hole_number(self) -> int:
        return self._hole_number

    @property
    def hole(self) -> Hole | None:
        return self._hole

    @property
    def shots(self) -> Tuple[Shot, ...]:
        return self._shots

    @property
    def is_completed(self) -> bool:
        return bool(self._shots) and self._shots[-1].completed

    @property
    def state(self) -> HoleState:
        if not self._shots:
            return HoleState.NO_HOLE_DATA
        if self.is_completed:
            return HoleState.COMPLETED
        if len(self._shots) == 1:
            return HoleState.AWAITING_FIRST_SHOT
        return HoleState.IN_PROGRESS

    # Transitions
    def set_hole_data(
        self, distance: float | str, par: int | None
    ) -> Tuple[Shot, ...]:
        """Configure the hole; creates the tee shot on first use."""

        hole_distance = parse_distance(distance, allow_zero=False)
        if isinstance(par, bool) or par not in PAR_OPTIONS:
            raise ShotValidationError("Please select par for this hole")

        hole = Hole(number=self._hole_number, par=par, distance=hole_distance)

        if not self._shots:
            shots: Tuple[Shot, ...] = (self._tee_shot(hole_distance),)
        elif self._shots[0].distance_to_hole != hole_distance:
            updated = list(self._shots)
            updated[0] = updated[0].model_copy(
                update={"distance_to_hole": hole_distance}
            )
            updated = self._rechain(updated, (0,))
            shots = recompute_strokes_gained(
                updated, hole_completed=self.is_completed
            )
        else:
            shots = self._shots

        self._hole = hole
        self._commit(shots, "set_hole_data")
        return self._shots

    def add_shot(self, lie: object, display_distance: object) -> Shot:
        """Record where the ball came to rest after the current open shot."""

        if not self._shots:
            raise LedgerPreconditionError("Please set hole data first")
        if self.is_completed:
            raise LedgerPreconditionError("Hole is already completed")

        new_lie = parse_lie(lie)
        # The previous shot is stored in yards; convert the entry before
        # chaining so feet on the green never meet yards off it.
        new_distance = to_canonical(new_lie, parse_distance(display_distance))

        updated = list(self._shots)
        new_shot = Shot(
            hole_number=self._hole_number,
            shot_number=len(updated) + 1,
            lie=new_lie,
            distance_to_hole=new_distance,
            completed=False,
        )
        previous = updated[-1]
        updated[-1] = previous.model_copy(
            update={
                "distance_traveled": distance_traveled(previous, new_shot),
                "completed": True,
            }
        )
        updated.append(new_shot)

        self._commit(
            recompute_strokes_gained(updated, hole_completed=False), "add_shot"
        )
        return self._shots[-1]

    def remove_last_shot(self) -> Shot:
        """Drop the trailing shot and reopen the one before it."""

        if len(self._shots) <= 1:
            raise LedgerPreconditionError("Cannot remove the first shot")

        updated = list(self._shots)
        removed = updated.pop()
        updated[-1] = updated[-1].model_copy(
            update={
                "completed": False,
                "distance_traveled": None,
                "strokes_gained": None,
            }
        )

        self._commit(
            recompute_strokes_gained(updated, hole_completed=False), "remove_last_shot"
        )
        return removed

    def edit_shot(self, index: int, lie: object, display_distance: object) -> Shot:
        """Change the lie and distance of an existing shot.

        The first shot always stays on the tee; a different lie is ignored.
        """

        if not 0 <= index < len(self._shots):
            raise LedgerPreconditionError(f"No shot at index {index}")

        new_lie = parse_lie(lie)
        distance = parse_distance(display_distance)
        if index == 0 and new_lie is not LieCategory.TEE:
            logger.info(
                "ignoring lie change on tee shot",
                extra={"hole": self._hole_number, "lie": new_lie.value},
            )
            new_lie = LieCategory.TEE
        new_distance = to_canonical(new_lie, distance)

        hole_completed = self.is_completed
        updated = list(self._shots)
        updated[index] = updated[index].model_copy(
            update={"lie": new_lie, "distance_to_hole": new_distance}
        )
        updated = self._rechain(updated, (index - 1, index))

        self._commit(
            recompute_strokes_gained(updated, hole_completed=hole_completed),
            "edit_shot",
        )
        return self._shots[index]

    def complete_hole(self) -> Shot:
        """Close out the trailing shot as holed."""

        if not self._shots:
            raise LedgerPreconditionError("No shots to complete")
        if self.is_completed:
            raise LedgerPreconditionError("Hole is already completed")

        updated = list(self._shots)
        last = updated[-1]
        updated[-1] = last.model_copy(
            update={"distance_traveled": last.distance_to_hole, "completed": True}
        )

        self._commit(
            recompute_strokes_gained(updated, hole_completed=True), "complete_hole"
        )
        return self._shots[-1]

    # Internal helpers
    def _tee_shot(self, distance: float) -> Shot:
        return Shot(
            hole_number=self._hole_number,
            shot_number=1,
            lie=LieCategory.TEE,
            distance_to_hole=distance,
            completed=False,
        )

    @staticmethod
    def _rechain(shots: list[Shot], indices: Iterable[int]) -> list[Shot]:
        """Re-derive distance traveled for the shots at ``indices``."""

        last_index = len(shots) - 1
        for i in indices:
            if i < 0:
                continue
            shot = shots[i]
            if i < last_index:
                traveled: Optional[float] = distance_traveled(shot, shots[i + 1])
            elif shot.completed:
                traveled = shot.distance_to_hole
            else:
                traveled = None
            shots[i] = shot.model_copy(update={"distance_traveled": traveled})
        return shots

    def _commit(self, shots: Sequence[Shot], operation: str) -> None:
        self._shots = tuple(shots)
        logger.debug(
            "ledger updated",
            extra={
                "hole": self._hole_number,
                "operation": operation,
                "shots": len(self._shots),
                "state": self.state.value,
            },
        )


__all__ = [
    "PAR_OPTIONS",
    "HoleState",
    "LedgerError",
    "LedgerPreconditionError",
    "ShotLedger",
    "ShotValidationError",
    "distance_traveled",
    "parse_distance",
    "parse_lie",
    "recompute_strokes_gained",
]
