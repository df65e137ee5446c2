"""Course enrollment and lesson progress tracking.

Provides:
- Enrollment with per-lesson progress fan-out
- Unenrollment removing the enrollment and its progress atomically
- Lesson completion flags and progress queries
"""

from .models import PROGRESS_TABLES_SQL, LessonProgress


__all__ = [
    "PROGRESS_TABLES_SQL",
    "LessonProgress",
]
