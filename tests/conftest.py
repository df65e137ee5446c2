"""Shared fixtures.

Service tests run against a fresh SQLite file per test. API tests start the
full application (lifespan included) with the same test catalog seeded at
startup.

Catalog ids are deterministic on a fresh database:

- course 1 "Python Basics": lesson 1 (questions 1-2), lesson 2 (question 3,
  which has no correct option)
- course 2 "SQL Fundamentals": lesson 3
- course 3 "Coming Soon": no lessons

Question 1 has options 1 and 2 (correct: 2); question 2 has options 3 and 4
(correct: 3); question 3 has options 5 and 6.
"""

import json
import os
import tempfile
from collections.abc import AsyncIterator, Iterator
from pathlib import Path
from typing import Any

import pytest
import pytest_asyncio


# Must be set before coursely.main configures logging at import time
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="coursely-logs-"))
os.environ.setdefault("LOG_FORMAT", "json")

from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncEngine  # noqa: E402

from coursely.auth.service import AuthService  # noqa: E402
from coursely.config import get_settings  # noqa: E402
from coursely.core.database import create_engine, init_schema, seed_catalog  # noqa: E402


TEST_CATALOG: list[dict[str, Any]] = [
    {
        "title": "Python Basics",
        "instructor": "Ada Souza",
        "lessons": [
            {
                "title": "Variables",
                "questions": [
                    {
                        "text": "Which type is immutable?",
                        "options": [
                            {"text": "list", "is_correct": False},
                            {"text": "tuple", "is_correct": True},
                        ],
                    },
                    {
                        "text": "What does len('abc') return?",
                        "options": [
                            {"text": "3", "is_correct": True},
                            {"text": "2", "is_correct": False},
                        ],
                    },
                ],
            },
            {
                "title": "Loops",
                "questions": [
                    {
                        "text": "Draft question",
                        "options": [
                            {"text": "a", "is_correct": False},
                            {"text": "b", "is_correct": False},
                        ],
                    }
                ],
            },
        ],
    },
    {
        "title": "SQL Fundamentals",
        "instructor": "Bruno Lima",
        "lessons": [{"title": "SELECT"}],
    },
    {"title": "Coming Soon", "instructor": None, "lessons": []},
]


@pytest.fixture
def catalog() -> list[dict[str, Any]]:
    """Test catalog (see module docstring for the resulting ids)."""
    return json.loads(json.dumps(TEST_CATALOG))


@pytest.fixture
def catalog_file(tmp_path: Path, catalog: list[dict[str, Any]]) -> Path:
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps(catalog), encoding="utf-8")
    return path


@pytest_asyncio.fixture
async def engine(
    tmp_path: Path, catalog: list[dict[str, Any]]
) -> AsyncIterator[AsyncEngine]:
    """Engine on a fresh, seeded SQLite database."""
    engine = create_engine(f"sqlite+aiosqlite:///{tmp_path / 'service.db'}")
    await init_schema(engine)
    await seed_catalog(engine, catalog)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def user_id(engine: AsyncEngine) -> int:
    """A registered user."""
    return await AuthService(engine).register_user(
        "Maria Silva", "maria@example.com", "s3cret-pass"
    )


@pytest.fixture
def client(
    tmp_path: Path, catalog_file: Path, monkeypatch: pytest.MonkeyPatch
) -> Iterator[TestClient]:
    """Client for a fully started application on a fresh database."""
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'api.db'}")
    monkeypatch.setenv("CATALOG_SEED_PATH", str(catalog_file))
    get_settings.cache_clear()

    from coursely.main import create_app

    with TestClient(create_app()) as test_client:
        yield test_client

    get_settings.cache_clear()


@pytest.fixture
def registered_user(client: TestClient) -> dict[str, Any]:
    """Register a user through the API; returns its id and credentials."""
    credentials = {
        "name": "Maria Silva",
        "email": "maria@example.com",
        "password": "s3cret-pass",
    }
    response = client.post("/register", json=credentials)
    assert response.status_code == 201
    return {"id": response.json()["userId"], **credentials}
