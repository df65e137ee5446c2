"""Course catalog service layer."""

from typing import TYPE_CHECKING

import structlog
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from coursely.core.errors import StorageError

from .models import Course, Lesson


if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine


logger = structlog.get_logger(__name__)


class CourseService:
    """Read-only access to courses and their lessons."""

    def __init__(self, engine: "AsyncEngine"):
        self.engine = engine
        self._prepare_statements()

    def _prepare_statements(self) -> None:
        self._list_courses_with_lessons = text("""
            SELECT c.id AS course_id, c.title AS course_title, c.instructor,
                   l.id AS lesson_id, l.title AS lesson_title
            FROM courses c
            LEFT JOIN lessons l ON c.id = l.course_id
            ORDER BY c.id, l.id
        """)

    async def list_courses(self) -> list[Course]:
        """List every course with its lessons, both in id order.

        A course without lessons has an empty lesson list.

        Raises:
            StorageError: On store failure
        """
        try:
            async with self.engine.connect() as conn:
                rows = (await conn.execute(self._list_courses_with_lessons)).all()
        except SQLAlchemyError as e:
            logger.error("course_list_failed", error=str(e))
            raise StorageError("Error fetching courses") from e

        # dicts keep insertion order, which is the query's id order
        courses: dict[int, Course] = {}
        for row in rows:
            course = courses.get(row.course_id)
            if course is None:
                course = courses[row.course_id] = Course.from_row(row)
            if row.lesson_id is not None:
                course.lessons.append(
                    Lesson(id=row.lesson_id, course_id=row.course_id, title=row.lesson_title)
                )

        return list(courses.values())
