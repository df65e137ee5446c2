"""Tests for the enrollment and progress endpoints."""

from typing import Any

from fastapi.testclient import TestClient


def _enroll(client: TestClient, user_id: int, course_id: int):
    return client.post("/enroll", json={"userId": user_id, "courseId": course_id})


def test_enroll_then_progress(client: TestClient, registered_user: dict[str, Any]) -> None:
    user_id = registered_user["id"]

    response = _enroll(client, user_id, 1)
    assert response.status_code == 200
    assert response.json() == {"message": "Enrolled successfully"}

    response = client.get(f"/progress/{user_id}")
    assert response.status_code == 200
    assert response.json() == [
        {"course_id": 1, "lesson_id": 1, "is_completed": False, "quiz_score": None},
        {"course_id": 1, "lesson_id": 2, "is_completed": False, "quiz_score": None},
    ]


def test_enroll_twice_conflicts(
    client: TestClient, registered_user: dict[str, Any]
) -> None:
    _enroll(client, registered_user["id"], 1)
    response = _enroll(client, registered_user["id"], 1)
    assert response.status_code == 409
    assert response.json()["message"] == "Already enrolled in this course"


def test_enroll_missing_course(
    client: TestClient, registered_user: dict[str, Any]
) -> None:
    response = client.post("/enroll", json={"userId": registered_user["id"]})
    assert response.status_code == 400
    assert response.json()["message"] == "User ID and Course ID are required."


def test_enroll_unknown_course_is_generic_500(
    client: TestClient, registered_user: dict[str, Any]
) -> None:
    response = _enroll(client, registered_user["id"], 999)
    assert response.status_code == 500
    assert response.json()["message"] == "Internal server error"

    assert client.get(f"/progress/{registered_user['id']}").json() == []


def test_unenroll(client: TestClient, registered_user: dict[str, Any]) -> None:
    user_id = registered_user["id"]
    _enroll(client, user_id, 1)
    _enroll(client, user_id, 2)

    response = client.post("/unenroll", json={"userId": user_id, "courseId": 1})
    assert response.status_code == 200
    assert response.json() == {"message": "Successfully unenrolled."}

    lessons = [row["lesson_id"] for row in client.get(f"/progress/{user_id}").json()]
    assert lessons == [3]


def test_unenroll_missing_field(client: TestClient) -> None:
    response = client.post("/unenroll", json={"courseId": 1})
    assert response.status_code == 400


def test_lesson_progress(client: TestClient, registered_user: dict[str, Any]) -> None:
    user_id = registered_user["id"]
    _enroll(client, user_id, 1)

    body = {"userId": user_id, "lessonId": 2, "isCompleted": True}
    for _ in range(2):
        response = client.post("/lesson-progress", json=body)
        assert response.status_code == 200
        assert response.json() == {"message": "Progress updated"}

    completed = {
        row["lesson_id"]: row["is_completed"]
        for row in client.get(f"/progress/{user_id}").json()
    }
    assert completed == {1: False, 2: True}


def test_progress_non_integer_user_id(client: TestClient) -> None:
    response = client.get("/progress/abc")
    assert response.status_code == 400
