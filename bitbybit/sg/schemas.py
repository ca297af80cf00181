"""Pydantic models for lies and recorded shots."""

from __future__ import annotations

import uuid
from enum import Enum
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class LieCategory(str, Enum):
    TEE = "tee"
    FAIRWAY = "fairway"
    ROUGH = "rough"
    SAND = "sand"
    RECOVERY = "recovery"
    GREEN = "green"

    @classmethod
    def _missing_(cls, value: object) -> Optional["LieCategory"]:
        if isinstance(value, str):
            lowered = value.strip().lower()
            for member in cls:
                if member.value == lowered:
                    return member
        return None


class Shot(BaseModel):
    """One stroke on a hole. Distances are stored in yards."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    hole_number: int = Field(
        ge=1,
        validation_alias=AliasChoices("hole_number", "holeNumber"),
        serialization_alias="holeNumber",
    )
    shot_number: int = Field(
        ge=1,
        validation_alias=AliasChoices("shot_number", "shotNumber"),
        serialization_alias="shotNumber",
    )
    lie: LieCategory
    distance_to_hole: float = Field(
        ge=0,
        validation_alias=AliasChoices("distance_to_hole", "distanceToHole"),
        serialization_alias="distanceToHole",
    )
    distance_traveled: Optional[float] = Field(
        default=None,
        validation_alias=AliasChoices("distance_traveled", "distanceTraveled"),
        serialization_alias="distanceTraveled",
    )
    completed: bool = False
    strokes_gained: Optional[float] = Field(
        default=None,
        validation_alias=AliasChoices("strokes_gained", "strokesGained"),
        serialization_alias="strokesGained",
    )

    model_config = ConfigDict(populate_by_name=True)


__all__ = ["LieCategory", "Shot"]
