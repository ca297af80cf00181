from __future__ import annotations

import logging
import uuid
from functools import lru_cache
from typing import Iterable, List

from bitbybit.config import get_settings
from bitbybit.storage.kv import STORAGE_KEYS, KeyValueStore, get_store

from .models import PAR_OPTIONS, Course, Hole, TeeColor, default_holes

logger = logging.getLogger(__name__)


class CourseNotFound(Exception):
    pass


class CourseService:
    def __init__(
        self, store: KeyValueStore | None = None, *, holes_per_round: int | None = None
    ):
        self._store = store if store is not None else get_store()
        self._holes_per_round = holes_per_round or get_settings().holes_per_round

    @property
    def holes_per_round(self) -> int:
        return self._holes_per_round

    def add_course(self, *, name: str, tee_colors: Iterable[TeeColor | str]) -> Course:
        cleaned_name = (name or "").strip()
        if not cleaned_name:
            raise ValueError("Please enter a course name")

        colors: List[TeeColor] = []
        for color in tee_colors:
            tee = TeeColor(color)
            if tee not in colors:
                colors.append(tee)
        if not colors:
            raise ValueError("Please select at least one tee color")

        course = Course(
            id=str(uuid.uuid4()),
            name=cleaned_name,
            tee_colors=colors,
            holes={tee: default_holes(self._holes_per_round) for tee in colors},
        )
        courses = self.list_courses()
        courses.append(course)
        self._write_courses(courses)
        logger.info("course added", extra={"course_id": course.id})
        return course

    def list_courses(self) -> List[Course]:
        payload = self._store.load(STORAGE_KEYS.COURSES) or []
        return [Course.model_validate(item) for item in payload]

    def get_course(self, course_id: str) -> Course:
        for course in self.list_courses():
            if course.id == course_id:
                return course
        raise CourseNotFound(course_id)

    def get_hole(
        self, *, course_id: str, tee_color: TeeColor | str, hole_number: int
    ) -> Hole | None:
        """Return the hole when its distance has been filled in."""

        hole = self.get_course(course_id).hole(TeeColor(tee_color), hole_number)
        if hole is None or not hole.is_configured:
            return None
        return hole

    def update_hole(
        self,
        *,
        course_id: str,
        tee_color: TeeColor | str,
        hole_number: int,
        par: int,
        distance: float,
    ) -> Course:
        self._check_hole_number(hole_number)
        if isinstance(par, bool) or par not in PAR_OPTIONS:
            raise ValueError(f"par must be one of {PAR_OPTIONS}")
        tee = TeeColor(tee_color)

        courses = self.list_courses()
        for index, course in enumerate(courses):
            if course.id != course_id:
                continue
            holes = dict(course.holes)
            tee_holes = list(holes.get(tee) or [])
            tee_holes.extend(default_holes(self._holes_per_round)[len(tee_holes) :])
            tee_holes[hole_number - 1] = Hole(
                number=hole_number, par=par, distance=distance
            )
            holes[tee] = tee_holes
            updated = course.model_copy(update={"holes": holes})
            courses[index] = updated
            self._write_courses(courses)
            return updated

        raise CourseNotFound(course_id)

    def _check_hole_number(self, hole_number: int) -> None:
        if hole_number < 1 or hole_number > self._holes_per_round:
            raise ValueError(
                f"hole_number must be between 1 and {self._holes_per_round}"
            )

    def _write_courses(self, courses: List[Course]) -> None:
        self._store.save(
            STORAGE_KEYS.COURSES,
            [course.model_dump(mode="json", by_alias=True) for course in courses],
        )


@lru_cache(maxsize=1)
def get_course_service() -> CourseService:
    return CourseService()


__all__ = ["CourseNotFound", "CourseService", "get_course_service"]
