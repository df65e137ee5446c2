"""Quiz service layer.

Business logic for:
- Listing a lesson's questions and options without revealing answers
- Grading a submission against the stored correct options
- Recording the resulting score on the user's lesson progress

Grading and the score update share one transaction.
"""

import re
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

import structlog
from sqlalchemy import bindparam, text
from sqlalchemy.exc import SQLAlchemyError

from coursely.core.errors import StorageError, ValidationError, require_fields

from .models import Option, Question, QuizResult


if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine


logger = structlog.get_logger(__name__)

_LEADING_INT = re.compile(r"\s*[+-]?\d+")


def parse_answers(answers: Mapping[Any, Any]) -> dict[int, int | None]:
    """Coerce a raw answer map to question id -> option id.

    Question ids must be integers (or integer strings). Option ids without a
    leading integer map to ``None`` and never match a correct option.

    Raises:
        ValidationError: If a question id is not an integer
    """
    parsed: dict[int, int | None] = {}
    for question_id, option_id in answers.items():
        try:
            parsed[int(question_id)] = _coerce_option_id(option_id)
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Invalid question id: {question_id!r}") from e
    return parsed


def _coerce_option_id(value: Any) -> int | None:
    """Read an option id the way browsers send it.

    Strings are read by their leading integer (``"2abc"`` is 2); anything
    without one is ``None``.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        return int(match.group()) if match else None
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return None


def grade(answers: Mapping[int, int | None], correct: Mapping[int, int]) -> QuizResult:
    """Grade answers against the correct option of each question.

    ``correct`` maps question id to its correct option id and only holds
    questions that can be graded. The score is rounded half up.

    Raises:
        ValidationError: If no submitted question can be graded
    """
    total = len(correct)
    if total == 0:
        raise ValidationError("None of the submitted questions can be graded")

    correct_count = sum(
        1 for question_id, option_id in correct.items()
        if answers.get(question_id) == option_id
    )
    # floor(100 * correct / total + 0.5) in integer arithmetic
    score = (200 * correct_count + total) // (2 * total)
    return QuizResult(score=score, total=total, correct_count=correct_count)


class QuizService:
    """Service for lesson quizzes."""

    def __init__(self, engine: "AsyncEngine"):
        self.engine = engine
        self._prepare_statements()

    def _prepare_statements(self) -> None:
        self._get_lesson_quiz = text("""
            SELECT q.id AS question_id, q.question_text,
                   o.id AS option_id, o.option_text
            FROM questions q
            JOIN options o ON o.question_id = q.id
            WHERE q.lesson_id = :lesson_id
            ORDER BY q.id, o.id
        """)
        self._get_correct_options = text("""
            SELECT question_id, id AS option_id FROM options
            WHERE question_id IN :question_ids AND is_correct = 1
        """).bindparams(bindparam("question_ids", expanding=True))
        self._update_quiz_score = text("""
            UPDATE lesson_progress SET quiz_score = :score
            WHERE user_id = :user_id AND lesson_id = :lesson_id
        """)

    async def get_quiz(self, lesson_id: int) -> list[Question]:
        """Get a lesson's questions with their options.

        Questions without options are omitted. A lesson without a quiz
        yields an empty list.

        Raises:
            StorageError: On store failure
        """
        try:
            async with self.engine.connect() as conn:
                rows = (
                    await conn.execute(self._get_lesson_quiz, {"lesson_id": lesson_id})
                ).all()
        except SQLAlchemyError as e:
            logger.error("quiz_fetch_failed", lesson_id=lesson_id, error=str(e))
            raise StorageError("Error fetching quiz") from e

        questions: dict[int, Question] = {}
        for row in rows:
            question = questions.get(row.question_id)
            if question is None:
                question = questions[row.question_id] = Question.from_row(row)
            question.options.append(Option(id=row.option_id, text=row.option_text))
        return list(questions.values())

    async def submit_quiz(
        self,
        user_id: int | None,
        lesson_id: int | None,
        answers: Mapping[Any, Any] | None,
    ) -> QuizResult:
        """Grade a submission and store the score on the lesson progress.

        Only the submitted question ids are graded. When the user has no
        progress row for the lesson the score is returned but not stored.

        Raises:
            ValidationError: If answers are empty, a question id is not an
                integer, or none of the questions can be graded
            StorageError: On store failure; no score is stored
        """
        if not answers:
            raise ValidationError("No answers submitted.")
        require_fields(user_id=user_id, lesson_id=lesson_id)
        submitted = parse_answers(answers)

        try:
            async with self.engine.begin() as conn:
                rows = (
                    await conn.execute(
                        self._get_correct_options,
                        {"question_ids": list(submitted)},
                    )
                ).all()
                result = grade(
                    submitted, {row.question_id: row.option_id for row in rows}
                )
                stored = await conn.execute(
                    self._update_quiz_score,
                    {"score": result.score, "user_id": user_id, "lesson_id": lesson_id},
                )
                score_stored = stored.rowcount > 0
        except SQLAlchemyError as e:
            logger.error("quiz_submit_failed", lesson_id=lesson_id, error=str(e))
            raise StorageError("Error submitting quiz") from e

        logger.info(
            "quiz_submitted",
            lesson_id=lesson_id,
            score=result.score,
            correct_count=result.correct_count,
            total=result.total,
            score_stored=score_stored,
        )
        return result
