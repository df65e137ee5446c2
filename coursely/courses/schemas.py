"""Pydantic schemas for the course catalog."""

from pydantic import BaseModel

from .models import Course


class LessonSummary(BaseModel):
    """Lesson as listed under its course."""

    id: int
    title: str


class CourseResponse(BaseModel):
    """Course with its lessons."""

    id: int
    title: str
    instructor: str | None = None
    lessons: list[LessonSummary]

    @classmethod
    def from_entity(cls, entity: Course) -> "CourseResponse":
        """Create response from entity."""
        return cls(
            id=entity.id,
            title=entity.title,
            instructor=entity.instructor,
            lessons=[
                LessonSummary(id=lesson.id, title=lesson.title)
                for lesson in entity.lessons
            ],
        )
