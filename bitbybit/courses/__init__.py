"""Course and tee configuration."""

from .models import Course, Hole, TeeColor
from .service import CourseNotFound, CourseService, get_course_service

__all__ = [
    "Course",
    "Hole",
    "TeeColor",
    "CourseNotFound",
    "CourseService",
    "get_course_service",
]
