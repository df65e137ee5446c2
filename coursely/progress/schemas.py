"""Pydantic schemas for enrollment and lesson progress.

Request fields are optional at the schema level so that absent ids are
reported by the service as a 400 with the API's own message.
"""

from pydantic import BaseModel

from coursely.core.schemas import CamelModel

from .models import LessonProgress


class EnrollRequest(CamelModel):
    """Request to enroll in (or unenroll from) a course."""

    user_id: int | None = None
    course_id: int | None = None


class LessonCompletionRequest(CamelModel):
    """Request to set a lesson's completion flag."""

    user_id: int | None = None
    lesson_id: int | None = None
    is_completed: bool | None = None


class LessonProgressResponse(BaseModel):
    """One lesson of an enrolled course."""

    course_id: int
    lesson_id: int
    is_completed: bool
    quiz_score: int | None = None

    @classmethod
    def from_entity(cls, entity: LessonProgress) -> "LessonProgressResponse":
        """Create response from entity."""
        return cls(
            course_id=entity.course_id,
            lesson_id=entity.lesson_id,
            is_completed=entity.is_completed,
            quiz_score=entity.quiz_score,
        )
