"""Lesson quizzes: question delivery and grading."""

from .models import QUIZ_TABLES_SQL, Option, Question, QuizResult


__all__ = [
    "QUIZ_TABLES_SQL",
    "Option",
    "Question",
    "QuizResult",
]
