from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from functools import lru_cache
from typing import List

from bitbybit.courses.models import TeeColor
from bitbybit.courses.service import CourseNotFound, CourseService
from bitbybit.storage.kv import STORAGE_KEYS, KeyValueStore, get_store

from .ledger import ShotLedger
from .models import Round, RoundSummary, compute_round_summary, merge_hole_shots

logger = logging.getLogger(__name__)


class RoundNotFound(Exception):
    pass


class RoundService:
    def __init__(
        self,
        store: KeyValueStore | None = None,
        courses: CourseService | None = None,
    ):
        self._store = store if store is not None else get_store()
        self._courses = courses if courses is not None else CourseService(self._store)

    @property
    def courses(self) -> CourseService:
        return self._courses

    # Round lifecycle
    def start_round(self, *, course_id: str, tee_color: TeeColor | str) -> Round:
        course = self._courses.get_course(course_id)
        tee = TeeColor(tee_color)
        if tee not in course.tee_colors:
            raise ValueError(f"course {course.name!r} has no {tee.value} tees")

        round_ = Round(
            id=str(uuid.uuid4()),
            date=datetime.now(timezone.utc),
            course_id=course.id,
            tee_color=tee,
        )
        rounds = self._read_rounds()
        rounds.append(round_)
        self._write_rounds(rounds)
        logger.info(
            "round started", extra={"round_id": round_.id, "course_id": course.id}
        )
        return round_

    def complete_round(self, round_id: str) -> Round:
        round_ = self.get_round(round_id)
        if round_.completed:
            return round_
        return self._replace_round(round_.model_copy(update={"completed": True}))

    def get_round(self, round_id: str) -> Round:
        for round_ in self._read_rounds():
            if round_.id == round_id:
                return round_
        raise RoundNotFound(round_id)

    def list_rounds(self) -> List[Round]:
        return sorted(self._read_rounds(), key=lambda r: r.date, reverse=True)

    def delete_round(self, round_id: str) -> None:
        rounds = self._read_rounds()
        remaining = [r for r in rounds if r.id != round_id]
        if len(remaining) == len(rounds):
            raise RoundNotFound(round_id)
        self._write_rounds(remaining)

    # Holes
    def open_hole(self, *, round_id: str, hole_number: int) -> ShotLedger:
        """Build the ledger for one hole from stored shots and course data."""

        self._check_hole_number(hole_number)
        round_ = self.get_round(round_id)
        try:
            hole = self._courses.get_hole(
                course_id=round_.course_id,
                tee_color=round_.tee_color,
                hole_number=hole_number,
            )
        except CourseNotFound:
            logger.warning(
                "round references a missing course",
                extra={"round_id": round_id, "course_id": round_.course_id},
            )
            hole = None
        return ShotLedger(hole_number, round_.shots_for_hole(hole_number), hole=hole)

    def set_hole_data(
        self, *, round_id: str, ledger: ShotLedger, par: int, distance: float
    ) -> Round:
        """Configure a hole on the ledger, the course, then the round."""

        round_ = self.get_round(round_id)
        ledger.set_hole_data(distance, par)
        hole = ledger.hole
        if hole is not None:
            try:
                self._courses.update_hole(
                    course_id=round_.course_id,
                    tee_color=round_.tee_color,
                    hole_number=ledger.hole_number,
                    par=hole.par,
                    distance=hole.distance,
                )
            except CourseNotFound:
                logger.warning(
                    "hole data not written back to missing course",
                    extra={"round_id": round_id, "course_id": round_.course_id},
                )
        return self.save_hole(round_id=round_id, ledger=ledger)

    def save_hole(self, *, round_id: str, ledger: ShotLedger) -> Round:
        """Merge the ledger's shots into the stored round.

        A storage failure propagates as ``StorageError``; the ledger keeps its
        state and can be saved again.
        """

        self._check_hole_number(ledger.hole_number)
        round_ = self.get_round(round_id)
        merged = merge_hole_shots(round_, ledger.hole_number, ledger.shots)
        return self._replace_round(merged)

    # Queries
    def get_summary(self, round_id: str) -> RoundSummary:
        round_ = self.get_round(round_id)
        try:
            course = self._courses.get_course(round_.course_id)
        except CourseNotFound:
            course = None
        return compute_round_summary(round_, course)

    # Internal helpers
    def _check_hole_number(self, hole_number: int) -> None:
        limit = self._courses.holes_per_round
        if hole_number < 1 or hole_number > limit:
            raise ValueError(f"hole_number must be between 1 and {limit}")

    def _replace_round(self, updated: Round) -> Round:
        rounds = self._read_rounds()
        for index, round_ in enumerate(rounds):
            if round_.id == updated.id:
                rounds[index] = updated
                self._write_rounds(rounds)
                return updated
        raise RoundNotFound(updated.id)

    def _read_rounds(self) -> List[Round]:
        payload = self._store.load(STORAGE_KEYS.ROUNDS) or []
        return [Round.model_validate(item) for item in payload]

    def _write_rounds(self, rounds: List[Round]) -> None:
        self._store.save(
            STORAGE_KEYS.ROUNDS,
            [round_.model_dump(mode="json", by_alias=True) for round_ in rounds],
        )


@lru_cache(maxsize=1)
def get_round_service() -> RoundService:
    return RoundService()


__all__ = ["RoundNotFound", "RoundService", "get_round_service"]
