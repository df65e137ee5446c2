"""Catalog seeding.

Courses, lessons, questions and options are read-only for the API. They
are loaded from a nested JSON document::

    [
      {"title": "...", "instructor": "...",
       "lessons": [
         {"title": "...",
          "questions": [
            {"text": "...",
             "options": [{"text": "...", "is_correct": true}, ...]}
          ]}
       ]}
    ]
"""

import json
from pathlib import Path
from typing import Any

import structlog
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine


logger = structlog.get_logger(__name__)

_COUNT_COURSES = text("SELECT COUNT(*) FROM courses")
_INSERT_COURSE = text("INSERT INTO courses (title, instructor) VALUES (:title, :instructor)")
_INSERT_LESSON = text("INSERT INTO lessons (course_id, title) VALUES (:course_id, :title)")
_INSERT_QUESTION = text(
    "INSERT INTO questions (lesson_id, question_text) VALUES (:lesson_id, :question_text)"
)
_INSERT_OPTION = text("""
    INSERT INTO options (question_id, option_text, is_correct)
    VALUES (:question_id, :option_text, :is_correct)
""")


def load_catalog(path: Path | str) -> list[dict[str, Any]]:
    """Read a catalog JSON file."""
    with Path(path).open(encoding="utf-8") as f:
        return json.load(f)


async def seed_catalog(engine: AsyncEngine, catalog: list[dict[str, Any]]) -> dict[str, int]:
    """Insert the catalog in one transaction.

    Does nothing if the courses table already has rows.

    Returns:
        Number of inserted rows per table.
    """
    counts = {"courses": 0, "lessons": 0, "questions": 0, "options": 0}

    async with engine.begin() as conn:
        existing = (await conn.execute(_COUNT_COURSES)).scalar_one()
        if existing:
            logger.info("catalog_seed_skipped", existing_courses=existing)
            return counts

        for course in catalog:
            result = await conn.execute(
                _INSERT_COURSE,
                {"title": course["title"], "instructor": course.get("instructor")},
            )
            course_id = result.lastrowid
            counts["courses"] += 1

            for lesson in course.get("lessons", []):
                result = await conn.execute(
                    _INSERT_LESSON, {"course_id": course_id, "title": lesson["title"]}
                )
                lesson_id = result.lastrowid
                counts["lessons"] += 1

                for question in lesson.get("questions", []):
                    result = await conn.execute(
                        _INSERT_QUESTION,
                        {"lesson_id": lesson_id, "question_text": question["text"]},
                    )
                    question_id = result.lastrowid
                    counts["questions"] += 1

                    for option in question.get("options", []):
                        await conn.execute(
                            _INSERT_OPTION,
                            {
                                "question_id": question_id,
                                "option_text": option["text"],
                                "is_correct": bool(option.get("is_correct", False)),
                            },
                        )
                        counts["options"] += 1

    logger.info("catalog_seeded", **counts)
    return counts
