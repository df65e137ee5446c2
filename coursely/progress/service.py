"""Enrollment and lesson progress service layer.

Business logic for:
- Enrolling a user, with one progress row per course lesson
- Unenrolling, removing the enrollment and its progress rows
- Progress queries and completion updates

Enroll and unenroll each run in a single transaction: either every row is
written (or removed) or none is.
"""

from collections.abc import Sequence
from typing import TYPE_CHECKING

import structlog
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from coursely.core.errors import ConflictError, StorageError, require_fields

from .models import LessonProgress


if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine


logger = structlog.get_logger(__name__)


class ProgressService:
    """Service for enrollment and lesson progress."""

    def __init__(self, engine: "AsyncEngine"):
        self.engine = engine
        self._prepare_statements()

    def _prepare_statements(self) -> None:
        # Enrollments
        self._get_enrollment = text("""
            SELECT user_id, course_id FROM enrollments
            WHERE user_id = :user_id AND course_id = :course_id
        """)
        self._insert_enrollment = text(
            "INSERT INTO enrollments (user_id, course_id) VALUES (:user_id, :course_id)"
        )
        self._delete_enrollment = text("""
            DELETE FROM enrollments
            WHERE user_id = :user_id AND course_id = :course_id
        """)
        self._get_course_lesson_ids = text(
            "SELECT id FROM lessons WHERE course_id = :course_id ORDER BY id"
        )

        # Lesson progress
        self._insert_lesson_progress = text("""
            INSERT INTO lesson_progress (user_id, lesson_id, is_completed, quiz_score)
            VALUES (:user_id, :lesson_id, 0, NULL)
        """)
        self._delete_course_lesson_progress = text("""
            DELETE FROM lesson_progress
            WHERE user_id = :user_id
              AND lesson_id IN (SELECT id FROM lessons WHERE course_id = :course_id)
        """)
        self._update_completion = text("""
            UPDATE lesson_progress SET is_completed = :is_completed
            WHERE user_id = :user_id AND lesson_id = :lesson_id
        """)
        self._get_user_progress = text("""
            SELECT e.course_id, l.id AS lesson_id,
                   COALESCE(lp.is_completed, 0) AS is_completed, lp.quiz_score
            FROM enrollments e
            JOIN lessons l ON e.course_id = l.course_id
            LEFT JOIN lesson_progress lp
                ON lp.user_id = e.user_id AND lp.lesson_id = l.id
            WHERE e.user_id = :user_id
            ORDER BY e.course_id, l.id
        """)

    # ==========================================================================
    # Enrollment Operations
    # ==========================================================================

    async def enroll_user(self, user_id: int | None, course_id: int | None) -> int:
        """Enroll user in a course.

        Creates the enrollment and one incomplete, unscored progress row per
        lesson of the course as it is at this moment.

        Returns:
            Number of lesson progress rows created

        Raises:
            ValidationError: If an id is absent
            ConflictError: If the user is already enrolled
            StorageError: If any statement fails (unknown user or course
                included); nothing is persisted
        """
        require_fields(
            "User ID and Course ID are required.", user_id=user_id, course_id=course_id
        )
        params = {"user_id": user_id, "course_id": course_id}

        try:
            async with self.engine.begin() as conn:
                existing = await conn.execute(self._get_enrollment, params)
                if existing.one_or_none() is not None:
                    raise ConflictError("Already enrolled in this course")

                await conn.execute(self._insert_enrollment, params)

                lesson_ids = (
                    await conn.execute(
                        self._get_course_lesson_ids, {"course_id": course_id}
                    )
                ).scalars().all()
                await self._create_lesson_progress(conn, user_id, lesson_ids)
        except IntegrityError as e:
            # A concurrent enroll of the same pair can win between check and insert
            if await self._is_enrolled(params):
                logger.info("enrollment_conflict", course_id=course_id)
                raise ConflictError("Already enrolled in this course") from e
            logger.error("enrollment_failed", course_id=course_id, error=str(e))
            raise StorageError("Error enrolling in course") from e
        except SQLAlchemyError as e:
            logger.error(
                "enrollment_failed",
                course_id=course_id,
                error_type=type(e).__name__,
                error=str(e),
            )
            raise StorageError("Error enrolling in course") from e

        logger.info("user_enrolled", course_id=course_id, lessons=len(lesson_ids))
        return len(lesson_ids)

    async def _is_enrolled(self, params: dict[str, int]) -> bool:
        try:
            async with self.engine.connect() as conn:
                result = await conn.execute(self._get_enrollment, params)
                return result.one_or_none() is not None
        except SQLAlchemyError as e:
            logger.error("enrollment_lookup_failed", error=str(e))
            raise StorageError("Error enrolling in course") from e

    async def _create_lesson_progress(
        self,
        conn: "AsyncConnection",
        user_id: int,
        lesson_ids: Sequence[int],
    ) -> None:
        """Insert the initial progress rows inside the caller's transaction."""
        if not lesson_ids:
            return
        await conn.execute(
            self._insert_lesson_progress,
            [{"user_id": user_id, "lesson_id": lesson_id} for lesson_id in lesson_ids],
        )

    async def unenroll_user(self, user_id: int | None, course_id: int | None) -> None:
        """Remove an enrollment and the user's progress on the course's lessons.

        Unenrolling from a course the user is not enrolled in succeeds and
        changes nothing.

        Raises:
            ValidationError: If an id is absent
            StorageError: If any statement fails; the user stays enrolled with
                their original progress
        """
        require_fields(
            "User ID and Course ID are required.", user_id=user_id, course_id=course_id
        )
        params = {"user_id": user_id, "course_id": course_id}

        try:
            async with self.engine.begin() as conn:
                progress = await conn.execute(self._delete_course_lesson_progress, params)
                progress_removed = progress.rowcount
                enrollment = await conn.execute(self._delete_enrollment, params)
                enrollment_removed = enrollment.rowcount > 0
        except SQLAlchemyError as e:
            logger.error("unenrollment_failed", course_id=course_id, error=str(e))
            raise StorageError("Failed to unenroll.") from e

        logger.info(
            "user_unenrolled",
            course_id=course_id,
            enrollment_removed=enrollment_removed,
            progress_rows_removed=progress_removed,
        )

    # ==========================================================================
    # Progress Operations
    # ==========================================================================

    async def get_user_progress(self, user_id: int) -> list[LessonProgress]:
        """Get progress on every lesson of every course the user is enrolled in.

        Raises:
            StorageError: On store failure
        """
        try:
            async with self.engine.connect() as conn:
                rows = (
                    await conn.execute(self._get_user_progress, {"user_id": user_id})
                ).all()
        except SQLAlchemyError as e:
            logger.error("progress_fetch_failed", error=str(e))
            raise StorageError("Error fetching progress") from e

        return [LessonProgress.from_row(row, user_id=user_id) for row in rows]

    async def set_lesson_completion(
        self,
        user_id: int | None,
        lesson_id: int | None,
        is_completed: bool | None,
    ) -> int:
        """Set the completion flag of a lesson progress row.

        The ids are not checked against enrollments: when no row matches,
        nothing changes and no error is raised.

        Returns:
            Number of rows updated (0 or 1)

        Raises:
            ValidationError: If a field is absent
            StorageError: On store failure
        """
        require_fields(user_id=user_id, lesson_id=lesson_id, is_completed=is_completed)

        try:
            async with self.engine.begin() as conn:
                result = await conn.execute(
                    self._update_completion,
                    {
                        "is_completed": bool(is_completed),
                        "user_id": user_id,
                        "lesson_id": lesson_id,
                    },
                )
                updated = result.rowcount
        except SQLAlchemyError as e:
            logger.error("lesson_progress_update_failed", lesson_id=lesson_id, error=str(e))
            raise StorageError("Error updating lesson progress") from e

        if updated == 0:
            logger.warning("lesson_progress_not_found", lesson_id=lesson_id)
        else:
            logger.info(
                "lesson_completion_set", lesson_id=lesson_id, is_completed=is_completed
            )
        return updated
