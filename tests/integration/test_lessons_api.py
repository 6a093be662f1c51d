"""Integration tests for the lesson and user endpoints."""

import uuid

import pytest
from fastapi.testclient import TestClient


def auth_header(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def lesson_body(**overrides) -> dict:
    data = {
        "type": "Private ski",
        "date": "2026-01-10",
        "timeLength": "2h",
        "guests": 2,
        "assignedTo": "None",
    }
    data.update(overrides)
    return {"lessonData": data}


@pytest.fixture
def admin_token(login_as) -> str:
    return login_as("admin", admin=True)


@pytest.fixture
def instructor_token(login_as) -> str:
    return login_as("alice")


def user_id(client: TestClient, token: str) -> str:
    return client.get("/api/is-admin", headers=auth_header(token)).json()["credentials"]["userId"]


def create_lesson(client: TestClient, token: str, **overrides) -> dict:
    response = client.post("/api/create-lesson", json=lesson_body(**overrides), headers=auth_header(token))
    assert response.status_code == 201, response.text
    return response.json()["lesson"]


class TestCreateLesson:
    """Tests for POST /api/create-lesson."""

    def test_admin_creates_unassigned_lesson(self, client: TestClient, admin_token: str) -> None:
        response = client.post("/api/create-lesson", json=lesson_body(), headers=auth_header(admin_token))

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Lesson created successfully"
        assert body["lesson"]["assignedTo"] == "None"
        assert body["lesson"]["timeLength"] == "2h"
        assert uuid.UUID(body["lesson"]["id"])

    def test_admin_assigns_instructor(self, client: TestClient, admin_token: str,
                                      instructor_token: str) -> None:
        alice_id = user_id(client, instructor_token)

        lesson = create_lesson(client, admin_token, assignedTo=alice_id)

        assert lesson["assignedTo"] == alice_id

    def test_assignee_id_stored_canonical(self, client: TestClient, admin_token: str,
                                          instructor_token: str) -> None:
        """Test that an upper-case assignee id reaches the instructor's calendar and the cascade."""
        alice_id = user_id(client, instructor_token)

        lesson = create_lesson(client, admin_token, assignedTo=alice_id.upper())

        assert lesson["assignedTo"] == alice_id
        calendar = client.get("/api/lessons", headers=auth_header(instructor_token))
        assert [item["id"] for item in calendar.json()["lessons"]] == [lesson["id"]]

        client.delete("/api/self-delete", headers=auth_header(instructor_token))

        board = client.get("/api/lessons", headers={**auth_header(admin_token), "available": "true"})
        assert [item["id"] for item in board.json()["lessons"]] == [lesson["id"]]

    def test_instructor_forbidden(self, client: TestClient, instructor_token: str) -> None:
        response = client.post("/api/create-lesson", json=lesson_body(), headers=auth_header(instructor_token))

        assert response.status_code == 403
        assert response.json() == {"message": "Failed to create lesson", "error": "Admin privileges required"}

    def test_missing_field(self, client: TestClient, admin_token: str) -> None:
        response = client.post(
            "/api/create-lesson", json=lesson_body(timeLength=None), headers=auth_header(admin_token)
        )

        assert response.status_code == 422
        assert response.json() == {"message": "Failed to create lesson", "error": "TimeLength required"}

    def test_unknown_assignee(self, client: TestClient, admin_token: str) -> None:
        response = client.post(
            "/api/create-lesson", json=lesson_body(assignedTo=str(uuid.uuid4())), headers=auth_header(admin_token)
        )

        assert response.status_code == 422

    def test_no_guests(self, client: TestClient, admin_token: str) -> None:
        response = client.post("/api/create-lesson", json=lesson_body(guests=0), headers=auth_header(admin_token))

        assert response.status_code == 422

    def test_unauthenticated(self, client: TestClient) -> None:
        assert client.post("/api/create-lesson", json=lesson_body()).status_code == 401


class TestRetrieveLessons:
    """Tests for GET /api/lessons."""

    def test_board_and_calendar(self, client: TestClient, admin_token: str, instructor_token: str) -> None:
        """Test that the board lists unassigned lessons and the calendar the caller's."""
        alice_id = user_id(client, instructor_token)
        create_lesson(client, admin_token, date="2026-01-10")
        create_lesson(client, admin_token, date="2026-01-11")
        create_lesson(client, admin_token, date="2026-01-12", assignedTo=alice_id)

        board = client.get("/api/lessons", headers={**auth_header(instructor_token), "available": "true"})
        calendar = client.get("/api/lessons", headers=auth_header(instructor_token))

        assert board.status_code == 200
        assert board.json()["message"] == "Available lessons retrieved"
        assert len(board.json()["lessons"]) == 2
        assert calendar.json()["message"] == f"Lessons retrieved for user ID {alice_id}"
        assert [lesson["date"] for lesson in calendar.json()["lessons"]] == ["2026-01-12"]

    def test_empty_calendar(self, client: TestClient, instructor_token: str) -> None:
        response = client.get("/api/lessons", headers=auth_header(instructor_token))

        assert response.status_code == 200
        assert response.json()["lessons"] == []


class TestClaimLesson:
    """Tests for PATCH /api/lessons/{lesson_id}/assign."""

    def test_claim(self, client: TestClient, admin_token: str, instructor_token: str) -> None:
        lesson = create_lesson(client, admin_token)

        response = client.patch(f"/api/lessons/{lesson['id']}/assign", headers=auth_header(instructor_token))

        assert response.status_code == 200
        assert response.json()["message"] == "Lesson assignment updated"
        assert response.json()["lesson"]["assignedTo"] == user_id(client, instructor_token)

    def test_claim_again_is_idempotent(self, client: TestClient, admin_token: str,
                                       instructor_token: str) -> None:
        lesson = create_lesson(client, admin_token)
        client.patch(f"/api/lessons/{lesson['id']}/assign", headers=auth_header(instructor_token))

        response = client.patch(f"/api/lessons/{lesson['id']}/assign", headers=auth_header(instructor_token))

        assert response.status_code == 200

    def test_claim_taken_lesson(self, client: TestClient, admin_token: str, instructor_token: str,
                                login_as) -> None:
        """Test that a lesson held by someone else cannot be claimed."""
        lesson = create_lesson(client, admin_token)
        client.patch(f"/api/lessons/{lesson['id']}/assign", headers=auth_header(instructor_token))
        bob_token = login_as("bob")

        response = client.patch(f"/api/lessons/{lesson['id']}/assign", headers=auth_header(bob_token))

        assert response.status_code == 409

    def test_unknown_lesson(self, client: TestClient, instructor_token: str) -> None:
        response = client.patch(f"/api/lessons/{uuid.uuid4()}/assign", headers=auth_header(instructor_token))

        assert response.status_code == 404

    def test_malformed_lesson_id(self, client: TestClient, instructor_token: str) -> None:
        response = client.patch("/api/lessons/not-a-uuid/assign", headers=auth_header(instructor_token))

        assert response.status_code == 422
        assert response.json()["message"] == "Invalid request"


class TestRemoveLesson:
    """Tests for DELETE /api/lessons/{lesson_id}."""

    def test_admin_removes(self, client: TestClient, admin_token: str) -> None:
        lesson = create_lesson(client, admin_token)

        response = client.delete(f"/api/lessons/{lesson['id']}", headers=auth_header(admin_token))

        assert response.status_code == 200
        assert response.json()["message"] == "Lesson successfully removed"
        board = client.get("/api/lessons", headers={**auth_header(admin_token), "available": "true"})
        assert board.json()["lessons"] == []

    def test_instructor_forbidden(self, client: TestClient, admin_token: str, instructor_token: str) -> None:
        lesson = create_lesson(client, admin_token)

        response = client.delete(f"/api/lessons/{lesson['id']}", headers=auth_header(instructor_token))

        assert response.status_code == 403

    def test_unknown_lesson(self, client: TestClient, admin_token: str) -> None:
        response = client.delete(f"/api/lessons/{uuid.uuid4()}", headers=auth_header(admin_token))

        assert response.status_code == 404


class TestSelfDeleteCascade:
    """Tests for lessons returning to the board when their instructor leaves."""

    def test_lessons_return_to_board(self, client: TestClient, admin_token: str,
                                     instructor_token: str) -> None:
        alice_id = user_id(client, instructor_token)
        for day in ("2026-01-10", "2026-01-11"):
            create_lesson(client, admin_token, date=day, assignedTo=alice_id)

        response = client.delete("/api/self-delete", headers=auth_header(instructor_token))

        assert response.status_code == 200
        board = client.get("/api/lessons", headers={**auth_header(admin_token), "available": "true"})
        assert len(board.json()["lessons"]) == 2


class TestListUsers:
    """Tests for GET /api/users."""

    def test_admin_lists_users(self, client: TestClient, admin_token: str, instructor_token: str) -> None:
        response = client.get("/api/users", headers=auth_header(admin_token))

        assert response.status_code == 200
        assert response.json()["message"] == "Users retrieved"
        users = response.json()["users"]
        assert sorted(user["username"] for user in users) == ["admin", "alice"]
        assert all("password" not in user for user in users)

    def test_instructor_forbidden(self, client: TestClient, instructor_token: str) -> None:
        assert client.get("/api/users", headers=auth_header(instructor_token)).status_code == 403
