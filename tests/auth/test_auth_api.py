"""Tests for the /register and /login endpoints."""

from typing import Any

from fastapi.testclient import TestClient


class TestRegister:
    def test_register_created(self, client: TestClient) -> None:
        response = client.post(
            "/register",
            json={"name": "Ana", "email": "ana@example.com", "password": "pw-123456"},
        )
        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "User created!"
        assert isinstance(data["userId"], int)

    def test_register_duplicate(
        self, client: TestClient, registered_user: dict[str, Any]
    ) -> None:
        response = client.post(
            "/register",
            json={
                "name": "Someone Else",
                "email": registered_user["email"],
                "password": "other-pw",
            },
        )
        assert response.status_code == 409
        assert response.json()["message"] == "This email is already registered."

    def test_register_missing_field(self, client: TestClient) -> None:
        response = client.post(
            "/register", json={"name": "Ana", "email": "ana@example.com"}
        )
        assert response.status_code == 400
        assert response.json()["message"] == "All fields are required"


class TestLogin:
    def test_login_success(
        self, client: TestClient, registered_user: dict[str, Any]
    ) -> None:
        response = client.post(
            "/login",
            json={
                "email": registered_user["email"],
                "password": registered_user["password"],
            },
        )
        assert response.status_code == 200
        assert response.json() == {
            "message": "Login successful!",
            "user": {"id": registered_user["id"], "name": registered_user["name"]},
        }

    def test_login_failures_uniform(
        self, client: TestClient, registered_user: dict[str, Any]
    ) -> None:
        """Wrong password, unknown email and missing fields all give one 401."""
        bodies = [
            {"email": registered_user["email"], "password": "wrong"},
            {"email": "nobody@example.com", "password": registered_user["password"]},
            {},
        ]
        responses = [client.post("/login", json=body) for body in bodies]

        assert {r.status_code for r in responses} == {401}
        assert len({r.json()["message"] for r in responses}) == 1
