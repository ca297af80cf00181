from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from bitbybit.courses.models import Course, TeeColor
from bitbybit.sg.schemas import LieCategory, Shot


class Round(BaseModel):
    id: str
    date: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    course_id: str = Field(
        validation_alias=AliasChoices("course_id", "courseId"),
        serialization_alias="courseId",
    )
    tee_color: TeeColor = Field(
        validation_alias=AliasChoices("tee_color", "teeColor"),
        serialization_alias="teeColor",
    )
    shots: List[Shot] = Field(default_factory=list)
    total_strokes: int = Field(
        default=0,
        validation_alias=AliasChoices("total_strokes", "totalStrokes"),
        serialization_alias="totalStrokes",
    )
    completed: bool = False

    model_config = ConfigDict(populate_by_name=True)

    def shots_for_hole(self, hole_number: int) -> List[Shot]:
        hole_shots = [s for s in self.shots if s.hole_number == hole_number]
        return sorted(hole_shots, key=lambda s: s.shot_number)


class RoundSummary(BaseModel):
    round_id: str = Field(serialization_alias="roundId")
    total_strokes: int = Field(serialization_alias="totalStrokes")
    shots_by_lie: Dict[LieCategory, int] = Field(serialization_alias="shotsByLie")
    holes_played: int = Field(serialization_alias="holesPlayed")
    total_par: Optional[int] = Field(default=None, serialization_alias="totalPar")
    score_vs_par: Optional[str] = Field(
        default=None, serialization_alias="scoreVsPar"
    )

    model_config = ConfigDict(populate_by_name=True)


def merge_hole_shots(round_: Round, hole_number: int, shots: Iterable[Shot]) -> Round:
    """Replace one hole's shots on ``round_`` and recount its strokes."""

    hole_shots = [s.model_copy() for s in shots]
    for shot in hole_shots:
        if shot.hole_number != hole_number:
            raise ValueError(
                f"shot {shot.id} belongs to hole {shot.hole_number}, not {hole_number}"
            )

    other_shots = [s for s in round_.shots if s.hole_number != hole_number]
    merged = other_shots + hole_shots
    return round_.model_copy(update={"shots": merged, "total_strokes": len(merged)})


def format_score_vs_par(diff: int) -> str:
    if diff == 0:
        return "Even"
    if diff > 0:
        return f"+{diff}"
    return str(diff)


def compute_round_summary(round_: Round, course: Course | None = None) -> RoundSummary:
    shots_by_lie = {lie: 0 for lie in LieCategory}
    for shot in round_.shots:
        shots_by_lie[shot.lie] += 1

    total_par = course.total_par(round_.tee_color) if course is not None else None
    score_vs_par = None
    if total_par is not None:
        score_vs_par = format_score_vs_par(round_.total_strokes - total_par)

    return RoundSummary(
        round_id=round_.id,
        total_strokes=round_.total_strokes,
        shots_by_lie=shots_by_lie,
        holes_played=len({s.hole_number for s in round_.shots}),
        total_par=total_par,
        score_vs_par=score_vs_par,
    )


__all__ = [
    "Round",
    "RoundSummary",
    "compute_round_summary",
    "format_score_vs_par",
    "merge_hole_shots",
]
