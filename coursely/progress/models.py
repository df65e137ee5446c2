"""Database models for enrollment and lesson progress.

Table definitions for:
- Enrollments: one row per (user, course) pair
- Lesson progress: completion flag and quiz score per (user, lesson) pair

Lesson progress rows are created and deleted together with their enrollment
by ProgressService, inside one transaction. There is no ON DELETE CASCADE:
the cascade is the service's job.
"""

from typing import Any


ENROLLMENTS_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS enrollments (
    user_id INTEGER NOT NULL REFERENCES users (id),
    course_id INTEGER NOT NULL REFERENCES courses (id),
    PRIMARY KEY (user_id, course_id)
)
"""

# quiz_score is NULL until a quiz is submitted
LESSON_PROGRESS_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS lesson_progress (
    user_id INTEGER NOT NULL REFERENCES users (id),
    lesson_id INTEGER NOT NULL REFERENCES lessons (id),
    is_completed BOOLEAN NOT NULL DEFAULT 0,
    quiz_score INTEGER CHECK (quiz_score BETWEEN 0 AND 100),
    PRIMARY KEY (user_id, lesson_id)
)
"""

ENROLLMENTS_COURSE_INDEX_SQL = """
CREATE INDEX IF NOT EXISTS enrollments_course_id_idx ON enrollments (course_id)
"""

PROGRESS_TABLES_SQL = [
    ENROLLMENTS_TABLE_SQL,
    LESSON_PROGRESS_TABLE_SQL,
    ENROLLMENTS_COURSE_INDEX_SQL,
]


class LessonProgress:
    """Progress of one user on one lesson of an enrolled course.

    Attributes:
        user_id: User id
        course_id: Course the lesson belongs to
        lesson_id: Lesson id
        is_completed: Completion flag set by the learner
        quiz_score: Last quiz score (0-100), None if no quiz submitted
    """

    def __init__(
        self,
        user_id: int,
        course_id: int,
        lesson_id: int,
        is_completed: bool = False,
        quiz_score: int | None = None,
    ):
        self.user_id = user_id
        self.course_id = course_id
        self.lesson_id = lesson_id
        self.is_completed = is_completed
        self.quiz_score = quiz_score

    @classmethod
    def from_row(cls, row: Any, user_id: int) -> "LessonProgress":
        """Create LessonProgress from a progress query row.

        Lessons without a progress row come back with NULLs and default to
        not completed, no score.
        """
        return cls(
            user_id=user_id,
            course_id=row.course_id,
            lesson_id=row.lesson_id,
            is_completed=bool(row.is_completed),
            quiz_score=row.quiz_score,
        )

    def __repr__(self) -> str:
        return (
            f"<LessonProgress user={self.user_id} lesson={self.lesson_id} "
            f"completed={self.is_completed} score={self.quiz_score}>"
        )
