"""Tests for the course catalog."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine

from coursely.core.errors import StorageError
from coursely.courses.service import CourseService


class TestCourseService:
    @pytest.mark.asyncio
    async def test_courses_grouped_in_id_order(self, engine: AsyncEngine) -> None:
        courses = await CourseService(engine).list_courses()

        assert [c.id for c in courses] == [1, 2, 3]
        assert [c.title for c in courses] == [
            "Python Basics",
            "SQL Fundamentals",
            "Coming Soon",
        ]
        assert [lesson.id for lesson in courses[0].lessons] == [1, 2]
        assert [lesson.title for lesson in courses[1].lessons] == ["SELECT"]

    @pytest.mark.asyncio
    async def test_course_without_lessons(self, engine: AsyncEngine) -> None:
        courses = await CourseService(engine).list_courses()
        assert courses[2].lessons == []
        assert courses[2].instructor is None

    @pytest.mark.asyncio
    async def test_store_failure(self, engine: AsyncEngine) -> None:
        async with engine.begin() as conn:
            await conn.execute(text("DROP TABLE options"))
            await conn.execute(text("DROP TABLE questions"))
            await conn.execute(text("DROP TABLE lesson_progress"))
            await conn.execute(text("DROP TABLE lessons"))

        with pytest.raises(StorageError):
            await CourseService(engine).list_courses()


def test_list_courses_endpoint(client: TestClient) -> None:
    response = client.get("/courses")
    assert response.status_code == 200

    data = response.json()
    assert data[0] == {
        "id": 1,
        "title": "Python Basics",
        "instructor": "Ada Souza",
        "lessons": [{"id": 1, "title": "Variables"}, {"id": 2, "title": "Loops"}],
    }
    assert data[2]["lessons"] == []
