"""Read-only course catalog."""

from .models import COURSES_TABLES_SQL, Course, Lesson


__all__ = ["COURSES_TABLES_SQL", "Course", "Lesson"]
