from __future__ import annotations

from collections.abc import Iterator

import pytest
from flask import Flask
from flask.testing import FlaskClient

from fitcoach.app import create_app
from fitcoach.infrastructure.container import Container
from fitcoach.shared.config import AppConfig


@pytest.fixture()
def app(app_config: AppConfig) -> Iterator[Flask]:
    container = Container(app_config)
    yield create_app(container=container)
    container.engine.dispose()


def _register_and_login(client: FlaskClient, email: str, role: str) -> tuple[str, str]:
    register = client.post(
        "/api/auth/register", json={"email": email, "password": "secret123", "role": role}
    )
    assert register.status_code == 201
    login = client.post("/api/auth/login", json={"email": email, "password": "secret123"})
    assert login.status_code == 200
    data = login.get_json()["data"]
    return data["user"]["id"], data["token"]


def _auth(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def test_trainer_client_workout_flow(app: Flask) -> None:
    with app.test_client() as client:
        _, trainer_token = _register_and_login(client, "coach@example.com", "TRAINER")
        client_id, client_token = _register_and_login(client, "member@example.com", "CLIENT")

        created_at = {}
        for name in ("Cardio HIIT", "Strength Training", "Yoga"):
            created = client.post(
                "/api/workouts", json={"name": name}, headers=_auth(trainer_token)
            )
            assert created.status_code == 201
            created_at[name] = created.get_json()["data"]["workout"]["createdAt"]
            assert created.get_json()["data"]["workout"]["trainer"]["email"] == "coach@example.com"

        listing = client.get("/api/workouts", headers=_auth(trainer_token))
        assert listing.status_code == 200
        data = listing.get_json()["data"]
        assert data["pagination"]["total"] == 3
        assert data["pagination"]["totalPages"] == 1
        assert [w["name"] for w in data["workouts"]] == ["Yoga", "Strength Training", "Cardio HIIT"]
        assert all(w["createdAt"] == created_at[w["name"]] for w in data["workouts"])

        search = client.get("/api/workouts?search=cardio", headers=_auth(trainer_token))
        [cardio] = search.get_json()["data"]["workouts"]
        assert cardio["name"] == "Cardio HIIT"

        assign = client.post(
            f"/api/workouts/{cardio['id']}/assign",
            json={"clientId": client_id},
            headers=_auth(trainer_token),
        )
        assert assign.status_code == 201
        assert assign.get_json()["data"]["assignment"]["status"] == "PENDING"

        again = client.post(
            f"/api/workouts/{cardio['id']}/assign",
            json={"clientId": client_id},
            headers=_auth(trainer_token),
        )
        assert again.status_code == 409

        mine = client.get("/api/workouts/my-workouts", headers=_auth(client_token))
        assert mine.status_code == 200
        [assignment] = mine.get_json()["data"]["assignments"]
        assert assignment["workout"]["name"] == "Cardio HIIT"
        assert assignment["workout"]["trainer"]["email"] == "coach@example.com"

        counted = client.get("/api/workouts?search=cardio", headers=_auth(trainer_token))
        assert counted.get_json()["data"]["workouts"][0]["assignmentCount"] == 1


def test_trainer_cannot_assign_another_trainers_workout(app: Flask) -> None:
    with app.test_client() as client:
        _, owner_token = _register_and_login(client, "owner@example.com", "TRAINER")
        _, intruder_token = _register_and_login(client, "intruder@example.com", "TRAINER")
        client_id, _ = _register_and_login(client, "member@example.com", "CLIENT")

        created = client.post(
            "/api/workouts", json={"name": "Leg Day"}, headers=_auth(owner_token)
        )
        workout_id = created.get_json()["data"]["workout"]["id"]

        response = client.post(
            f"/api/workouts/{workout_id}/assign",
            json={"clientId": client_id},
            headers=_auth(intruder_token),
        )

    assert response.status_code == 403
    assert response.get_json()["error"] == "workout_not_owned"


def test_register_duplicate_email_and_bad_role(app: Flask) -> None:
    with app.test_client() as client:
        _register_and_login(client, "a@x.com", "CLIENT")

        duplicate = client.post(
            "/api/auth/register", json={"email": "a@x.com", "password": "secret123"}
        )
        bad_role = client.post(
            "/api/auth/register",
            json={"email": "b@x.com", "password": "secret123", "role": "ADMIN"},
        )
        wrong_password = client.post(
            "/api/auth/login", json={"email": "a@x.com", "password": "nope"}
        )

    assert duplicate.status_code == 409
    assert bad_role.status_code == 400
    assert bad_role.get_json()["error"] == "invalid_role"
    assert wrong_password.status_code == 401


def test_health_and_security_headers(app: Flask) -> None:
    with app.test_client() as client:
        response = client.get("/health", headers={"X-Request-ID": "req-123"})

    assert response.status_code == 200
    body = response.get_json()
    assert body["status"] == "ok"
    assert body["database"] == "ok"
    assert response.headers["X-Request-ID"] == "req-123"
    assert response.headers["X-Content-Type-Options"] == "nosniff"
