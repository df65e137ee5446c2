"""Database models for the course catalog.

Courses and lessons are read-only for the API; they are seeded externally.
"""

from typing import Any


COURSES_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS courses (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    title TEXT NOT NULL,
    instructor TEXT
)
"""

# Each lesson belongs to exactly one course
LESSONS_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS lessons (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    course_id INTEGER NOT NULL REFERENCES courses (id),
    title TEXT NOT NULL
)
"""

LESSONS_COURSE_INDEX_SQL = """
CREATE INDEX IF NOT EXISTS lessons_course_id_idx ON lessons (course_id)
"""

COURSES_TABLES_SQL = [
    COURSES_TABLE_SQL,
    LESSONS_TABLE_SQL,
    LESSONS_COURSE_INDEX_SQL,
]


class Lesson:
    """Lesson entity."""

    def __init__(self, id: int, course_id: int, title: str):
        self.id = id
        self.course_id = course_id
        self.title = title

    def __repr__(self) -> str:
        return f"<Lesson {self.id} course={self.course_id}>"


class Course:
    """Course entity with its lessons in id order."""

    def __init__(
        self,
        id: int,
        title: str,
        instructor: str | None = None,
        lessons: list[Lesson] | None = None,
    ):
        self.id = id
        self.title = title
        self.instructor = instructor
        self.lessons = lessons if lessons is not None else []

    @classmethod
    def from_row(cls, row: Any) -> "Course":
        """Create a Course (without lessons) from a catalog join row."""
        return cls(id=row.course_id, title=row.course_title, instructor=row.instructor)

    def __repr__(self) -> str:
        return f"<Course {self.id} {self.title!r} lessons={len(self.lessons)}>"
