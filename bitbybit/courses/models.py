from __future__ import annotations

from enum import Enum
from typing import Dict, List

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

PAR_OPTIONS = (3, 4, 5)


class TeeColor(str, Enum):
    RED = "Red"
    WHITE = "White"
    BLUE = "Blue"
    GOLD = "Gold"


class Hole(BaseModel):
    number: int = Field(ge=1)
    par: int = 4
    distance: float = Field(default=0.0, ge=0)

    @property
    def is_configured(self) -> bool:
        return self.distance > 0


class Course(BaseModel):
    id: str
    name: str
    tee_colors: List[TeeColor] = Field(
        validation_alias=AliasChoices("tee_colors", "teeColors"),
        serialization_alias="teeColors",
    )
    holes: Dict[TeeColor, List[Hole]] = Field(default_factory=dict)

    model_config = ConfigDict(populate_by_name=True)

    def hole(self, tee_color: TeeColor, hole_number: int) -> Hole | None:
        for hole in self.holes.get(TeeColor(tee_color), []):
            if hole.number == hole_number:
                return hole
        return None

    def total_par(self, tee_color: TeeColor) -> int | None:
        holes = self.holes.get(TeeColor(tee_color))
        if not holes:
            return None
        return sum(hole.par for hole in holes)


def default_holes(count: int) -> List[Hole]:
    return [Hole(number=i + 1, par=4, distance=0.0) for i in range(count)]


__all__ = ["PAR_OPTIONS", "Course", "Hole", "TeeColor", "default_holes"]
