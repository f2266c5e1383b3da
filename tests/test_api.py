# =============================================================================
# tests/test_api.py - HTTP Endpoint Tests
# =============================================================================
# End-to-end tests through FastAPI's TestClient:
# - Task CRUD and user register/login scenarios
# - Decode errors -> 400, missing task -> 404
# - Persistence across restarts and best-effort saves
# - CORS policy
# =============================================================================

import json

import pytest

from fastapi.testclient import TestClient

from app.config import Settings
from app.main import create_app


# =============================================================================
# User Scenarios
# =============================================================================

class TestUsers:
    """Register and login."""

    def test_register_then_login(self, client, sample_user_dict):
        response = client.post("/register", json=sample_user_dict)
        assert response.status_code == 200
        assert response.content == b""

        response = client.post("/login", json=sample_user_dict)
        assert response.status_code == 200
        assert "success" in response.json()["message"].lower()

    def test_login_wrong_password(self, client, sample_user_dict):
        client.post("/register", json=sample_user_dict)

        response = client.post("/login", json={**sample_user_dict, "password": "wrong"})

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_CREDENTIALS"

    def test_unknown_user_looks_like_wrong_password(self, client, sample_user_dict):
        """Unknown usernames and bad passwords are indistinguishable."""
        client.post("/register", json=sample_user_dict)

        wrong_password = client.post("/login", json={**sample_user_dict, "password": "nope"})
        unknown_user = client.post("/login", json={"id": 9, "username": "ghost", "password": "p"})

        assert unknown_user.status_code == wrong_password.status_code == 400
        assert unknown_user.json() == wrong_password.json()

    def test_register_invalid_body(self, client):
        response = client.post("/register", json={"id": 1, "username": "a"})

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_register_mistyped_body(self, client, sample_user_dict):
        response = client.post("/register", json={**sample_user_dict, "id": "1"})

        assert response.status_code == 400
        assert client.post("/login", json=sample_user_dict).status_code == 400

    def test_login_mistyped_body(self, client, sample_user_dict):
        client.post("/register", json={**sample_user_dict, "password": "123"})

        response = client.post("/login", json={"username": "a", "password": 123})

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_register_persists(self, client, sample_user_dict, db_path):
        response = client.post("/register", json=sample_user_dict)

        assert response.headers["X-Persisted"] == "true"
        data = json.loads(db_path.read_text(encoding="utf-8"))
        assert data["users"]["1"] == sample_user_dict


# =============================================================================
# Task Scenarios
# =============================================================================

class TestTasks:
    """Task CRUD."""

    def test_create_read_delete(self, client, sample_task_dict):
        response = client.post("/task", json=sample_task_dict)
        assert response.status_code == 200
        assert response.json() == {"message": "Task created"}

        response = client.get("/task/5")
        assert response.status_code == 200
        assert response.json() == sample_task_dict

        response = client.delete("/task/5")
        assert response.status_code == 200
        assert response.json() == {"message": "Task deleted"}

        response = client.get("/task/5")
        assert response.status_code == 404
        assert response.json()["code"] == "TASK_NOT_FOUND"

    def test_list_tasks_empty(self, client):
        response = client.get("/tasks")

        assert response.status_code == 200
        assert response.json() == []

    def test_list_tasks(self, client, sample_task_dict):
        client.post("/task", json=sample_task_dict)
        client.post("/task", json={"id": 6, "name": "y", "completed": True})

        response = client.get("/tasks")

        assert response.status_code == 200
        assert sorted(t["id"] for t in response.json()) == [5, 6]

    def test_put_updates_task(self, client, sample_task_dict):
        client.post("/task", json=sample_task_dict)

        response = client.put("/task", json={**sample_task_dict, "completed": True})

        assert response.status_code == 200
        assert response.json() == {"message": "Task updated"}
        assert client.get("/task/5").json()["completed"] is True

    def test_patch_upserts_missing_task(self, client):
        response = client.patch("/task", json={"id": 11, "name": "new", "completed": False})

        assert response.status_code == 200
        assert client.get("/task/11").json()["name"] == "new"

    def test_delete_missing_task_is_ok(self, client):
        response = client.delete("/task/12345")

        assert response.status_code == 200

    def test_create_invalid_body(self, client):
        response = client.post("/task", json={"id": "abc", "name": "x", "completed": False})

        assert response.status_code == 400
        body = response.json()
        assert body["code"] == "VALIDATION_ERROR"
        assert body["errors"]

    def test_create_non_json_body(self, client):
        response = client.post(
            "/task",
            content=b"not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400

    def test_update_invalid_body(self, client):
        response = client.put("/task", json={"name": "no id", "completed": False})

        assert response.status_code == 400

    @pytest.mark.parametrize(
        "overrides",
        [
            {"id": "5"},
            {"completed": "yes"},
            {"id": 5.0, "completed": 1},
        ],
    )
    @pytest.mark.parametrize("method", ["post", "put", "patch"])
    def test_mistyped_body_is_not_coerced(self, client, sample_task_dict, overrides, method):
        """Wrong JSON types are decode errors, and nothing gets stored."""
        response = client.request(method.upper(), "/task", json={**sample_task_dict, **overrides})

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"
        assert client.get("/task/5").status_code == 404

    def test_invalid_path_id(self, client):
        assert client.get("/task/abc").status_code == 400
        assert client.get("/task/-1").status_code == 400


# =============================================================================
# Persistence Behaviour
# =============================================================================

class TestPersistence:
    """Store survives restarts; save failures do not fail requests."""

    def test_restart_keeps_tasks(self, test_settings, sample_task_dict):
        with TestClient(create_app(test_settings)) as first:
            assert first.post("/task", json=sample_task_dict).status_code == 200

        # Fresh app reloads from the same file
        with TestClient(create_app(test_settings)) as second:
            response = second.get("/task/5")

        assert response.status_code == 200
        assert response.json() == sample_task_dict

    def test_malformed_db_starts_empty(self, test_settings, db_path):
        db_path.write_text("{broken", encoding="utf-8")

        with TestClient(create_app(test_settings)) as client:
            response = client.get("/tasks")

        assert response.status_code == 200
        assert response.json() == []

    def test_unwritable_db_is_best_effort(self, tmp_path, sample_task_dict):
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        settings = Settings(DB_PATH=str(blocker / "db.json"))

        with TestClient(create_app(settings)) as client:
            response = client.post("/task", json=sample_task_dict)
            assert response.status_code == 200
            assert response.headers["X-Persisted"] == "false"

            # In-memory state still serves the task
            assert client.get("/task/5").status_code == 200

    def test_unwritable_db_strict_mode(self, tmp_path, sample_task_dict):
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        settings = Settings(DB_PATH=str(blocker / "db.json"), STRICT_PERSISTENCE=True)

        with TestClient(create_app(settings)) as client:
            response = client.post("/task", json=sample_task_dict)

        assert response.status_code == 500
        assert response.json()["code"] == "WRITE_ERROR"

    def test_busy_store_answers_503(self, client):
        guard = client.app.state.guard
        guard._lock.acquire()
        try:
            response = client.get("/tasks")
        finally:
            guard._lock.release()

        assert response.status_code == 503
        assert response.json()["code"] == "STORE_UNAVAILABLE"


# =============================================================================
# CORS
# =============================================================================

class TestCors:
    """Only localhost origins and the literal 'null' origin are allowed."""

    def _preflight(self, client, origin, method="POST"):
        return client.options(
            "/task",
            headers={
                "Origin": origin,
                "Access-Control-Request-Method": method,
                "Access-Control-Request-Headers": "Content-Type",
            },
        )

    def test_localhost_preflight(self, client):
        response = self._preflight(client, "http://localhost:3000")

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "http://localhost:3000"
        assert response.headers["access-control-max-age"] == "3600"

    def test_null_origin_preflight(self, client):
        response = self._preflight(client, "null")

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "null"

    def test_foreign_origin_rejected(self, client):
        response = self._preflight(client, "http://evil.example.com")

        assert response.status_code == 400
        assert "access-control-allow-origin" not in response.headers

    def test_disallowed_method_rejected(self, client):
        response = self._preflight(client, "http://localhost:3000", method="PATCH")

        assert response.status_code == 400

    def test_simple_request_gets_origin_header(self, client):
        response = client.get("/tasks", headers={"Origin": "http://localhost:5173"})

        assert response.headers["access-control-allow-origin"] == "http://localhost:5173"


# =============================================================================
# Health
# =============================================================================

class TestHealth:

    def test_health_counts(self, client, sample_task_dict, sample_user_dict):
        client.post("/task", json=sample_task_dict)
        client.post("/register", json=sample_user_dict)

        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["task_count"] == 1
        assert body["user_count"] == 1
