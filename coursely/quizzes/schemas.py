"""Pydantic schemas for quizzes."""

from typing import Any

from pydantic import BaseModel, Field

from coursely.core.schemas import CamelModel

from .models import Question, QuizResult


class OptionResponse(BaseModel):
    id: int
    text: str


class QuestionResponse(BaseModel):
    """Question with its options. Correct answers are never included."""

    id: int
    text: str
    options: list[OptionResponse]

    @classmethod
    def from_entity(cls, entity: Question) -> "QuestionResponse":
        """Create response from entity."""
        return cls(
            id=entity.id,
            text=entity.text,
            options=[OptionResponse(id=o.id, text=o.text) for o in entity.options],
        )


class QuizSubmitRequest(CamelModel):
    """Quiz submission.

    ``answers`` maps question id to chosen option id. JSON object keys are
    strings, so both keys and values are coerced to integers when grading.
    """

    user_id: int | None = None
    lesson_id: int | None = None
    answers: dict[str, Any] | None = Field(
        None, description="Question id -> chosen option id"
    )


class QuizResultResponse(CamelModel):
    """Graded submission."""

    score: int
    total: int
    correct_count: int

    @classmethod
    def from_result(cls, result: QuizResult) -> "QuizResultResponse":
        return cls(
            score=result.score,
            total=result.total,
            correct_count=result.correct_count,
        )
