"""Database models for lesson quizzes.

Table definitions for:
- Questions: multiple-choice questions attached to a lesson
- Options: answer choices; exactly one per question is marked correct
"""

from dataclasses import dataclass, field
from typing import Any


QUESTIONS_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS questions (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    lesson_id INTEGER NOT NULL REFERENCES lessons (id),
    question_text TEXT NOT NULL
)
"""

OPTIONS_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS options (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    question_id INTEGER NOT NULL REFERENCES questions (id),
    option_text TEXT NOT NULL,
    is_correct BOOLEAN NOT NULL DEFAULT 0
)
"""

QUESTIONS_LESSON_INDEX_SQL = """
CREATE INDEX IF NOT EXISTS questions_lesson_id_idx ON questions (lesson_id)
"""

OPTIONS_QUESTION_INDEX_SQL = """
CREATE INDEX IF NOT EXISTS options_question_id_idx ON options (question_id)
"""

QUIZ_TABLES_SQL = [
    QUESTIONS_TABLE_SQL,
    OPTIONS_TABLE_SQL,
    QUESTIONS_LESSON_INDEX_SQL,
    OPTIONS_QUESTION_INDEX_SQL,
]


@dataclass
class Option:
    """Answer choice as shown to learners (no correctness flag)."""

    id: int
    text: str


@dataclass
class Question:
    """Quiz question with its options in id order."""

    id: int
    text: str
    options: list[Option] = field(default_factory=list)

    @classmethod
    def from_row(cls, row: Any) -> "Question":
        """Create a Question (without options) from a quiz join row."""
        return cls(id=row.question_id, text=row.question_text)


@dataclass(frozen=True)
class QuizResult:
    """Outcome of grading one submission.

    Attributes:
        score: Rounded percentage of correct answers (0-100)
        total: Questions that have a correct option on record
        correct_count: Submitted answers matching the correct option
    """

    score: int
    total: int
    correct_count: int
