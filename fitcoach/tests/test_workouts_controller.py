from __future__ import annotations

import uuid
from datetime import UTC, datetime
from unittest.mock import MagicMock

import pytest
from flask import Flask

from fitcoach.application.services.token_codec import JwtTokenCodec
from fitcoach.application.use_cases.users.verify_token import VerifyTokenUseCase
from fitcoach.application.use_cases.workouts.list_trainer_workouts import (
    ListTrainerWorkoutsInput,
)
from fitcoach.domain.users.entities import Role, TokenIdentity
from fitcoach.domain.workouts.entities import (
    AssignmentDetails,
    AssignmentStatus,
    Pagination,
    UserRef,
    Workout,
    WorkoutPage,
    WorkoutRef,
    WorkoutSummary,
)
from fitcoach.domain.workouts.exceptions import (
    AssignmentAlreadyExistsError,
    WorkoutNotFoundError,
    WorkoutNotOwnedError,
)
from fitcoach.interfaces.http.auth import RoleGate
from fitcoach.interfaces.http.controllers.workouts_controller import WorkoutsController
from fitcoach.shared.config import SecurityConfig
from fitcoach.shared.middleware.error_handler import configure_error_handling

NOW = datetime(2025, 3, 1, 9, 30, tzinfo=UTC)
CLIENT_ID = str(uuid.uuid4())


class Harness:
    def __init__(
        self, app: Flask, codec: JwtTokenCodec, security: SecurityConfig | None = None
    ) -> None:
        self.app = app
        self.codec = codec
        self.create = MagicMock()
        self.list_workouts = MagicMock()
        self.assign = MagicMock()
        self.my_workouts = MagicMock()
        controller = WorkoutsController(
            gate=RoleGate(verify_token=VerifyTokenUseCase(tokens=codec)),
            create_workout=self.create,
            list_trainer_workouts=self.list_workouts,
            assign_workout=self.assign,
            list_client_assignments=self.my_workouts,
            security=security or SecurityConfig(enable_rate_limit=False),
        )
        app.register_blueprint(controller.as_blueprint())

    def headers(self, role: Role, user_id: str = "trainer-1") -> dict[str, str]:
        token = self.codec.issue(TokenIdentity(user_id=user_id, email="u@x.com", role=role))
        return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def harness(codec: JwtTokenCodec) -> Harness:
    app = Flask(__name__)
    configure_error_handling(app)
    return Harness(app, codec)


def test_create_workout_returns_201(harness: Harness) -> None:
    harness.create.execute.return_value = Workout(
        id="w-1", name="Leg Day", description=None, trainer_id="trainer-1", created_at=NOW
    )

    with harness.app.test_client() as client:
        response = client.post(
            "/api/workouts",
            json={"name": "  Leg Day  ", "description": ""},
            headers=harness.headers(Role.TRAINER),
        )

    assert response.status_code == 201
    harness.create.execute.assert_called_once_with("Leg Day", None, "trainer-1")
    workout = response.get_json()["data"]["workout"]
    assert workout["trainerId"] == "trainer-1"
    assert workout["trainer"] == {"id": "trainer-1", "email": "u@x.com", "role": "TRAINER"}
    assert workout["createdAt"].startswith("2025-03-01T09:30:00")


def test_create_workout_short_name_returns_400(harness: Harness) -> None:
    with harness.app.test_client() as client:
        response = client.post(
            "/api/workouts", json={"name": "ab"}, headers=harness.headers(Role.TRAINER)
        )

    assert response.status_code == 400
    assert response.get_json()["context"]["fields"] == ["name"]
    harness.create.execute.assert_not_called()


def test_missing_token_returns_401(harness: Harness) -> None:
    with harness.app.test_client() as client:
        response = client.get("/api/workouts")

    assert response.status_code == 401
    assert response.get_json()["error"] == "unauthorized"


def test_garbage_token_returns_401(harness: Harness) -> None:
    with harness.app.test_client() as client:
        response = client.get("/api/workouts", headers={"Authorization": "Bearer garbage"})

    assert response.status_code == 401
    assert response.get_json()["error"] == "invalid_token"


def test_client_cannot_create_workouts(harness: Harness) -> None:
    with harness.app.test_client() as client:
        response = client.post(
            "/api/workouts",
            json={"name": "Leg Day"},
            headers=harness.headers(Role.CLIENT, "client-1"),
        )

    assert response.status_code == 403
    payload = response.get_json()
    assert payload["error"] == "forbidden_role"
    assert payload["message"] == "Access denied. Required role: TRAINER"
    harness.create.execute.assert_not_called()


def test_trainer_cannot_read_client_workouts(harness: Harness) -> None:
    with harness.app.test_client() as client:
        response = client.get("/api/workouts/my-workouts", headers=harness.headers(Role.TRAINER))

    assert response.status_code == 403


def test_list_workouts_passes_query_and_returns_pagination(harness: Harness) -> None:
    harness.list_workouts.execute.return_value = WorkoutPage(
        items=[
            WorkoutSummary(
                id="w-1",
                name="Cardio HIIT",
                description=None,
                trainer_id="trainer-1",
                created_at=NOW,
                assignment_count=2,
            )
        ],
        pagination=Pagination(page=2, limit=5, total=6),
    )

    with harness.app.test_client() as client:
        response = client.get(
            "/api/workouts?page=2&limit=5&search=cardio", headers=harness.headers(Role.TRAINER)
        )

    assert response.status_code == 200
    harness.list_workouts.execute.assert_called_once_with(
        ListTrainerWorkoutsInput(trainer_id="trainer-1", page=2, limit=5, search="cardio")
    )
    data = response.get_json()["data"]
    assert data["workouts"][0]["assignmentCount"] == 2
    assert data["pagination"] == {"page": 2, "limit": 5, "total": 6, "totalPages": 2}


@pytest.mark.parametrize("query", ["page=0", "limit=101", "limit=abc", "search=" + "x" * 101])
def test_list_workouts_rejects_bad_query(harness: Harness, query: str) -> None:
    with harness.app.test_client() as client:
        response = client.get(f"/api/workouts?{query}", headers=harness.headers(Role.TRAINER))

    assert response.status_code == 400
    harness.list_workouts.execute.assert_not_called()


def test_assign_returns_assignment_with_client(harness: Harness) -> None:
    harness.assign.execute.return_value = AssignmentDetails(
        id="a-1",
        workout_id="w-1",
        client_id=CLIENT_ID,
        status=AssignmentStatus.PENDING,
        assigned_date=NOW,
        workout=WorkoutRef(id="w-1", name="Leg Day", description=None),
        client=UserRef(id=CLIENT_ID, email="c@x.com"),
    )

    with harness.app.test_client() as client:
        response = client.post(
            "/api/workouts/w-1/assign",
            json={"clientId": CLIENT_ID},
            headers=harness.headers(Role.TRAINER),
        )

    assert response.status_code == 201
    harness.assign.execute.assert_called_once_with("w-1", CLIENT_ID, "trainer-1")
    assignment = response.get_json()["data"]["assignment"]
    assert assignment["status"] == "PENDING"
    assert assignment["client"] == {"id": CLIENT_ID, "email": "c@x.com"}
    assert assignment["workout"]["name"] == "Leg Day"


def test_assign_requires_uuid_client_id(harness: Harness) -> None:
    with harness.app.test_client() as client:
        response = client.post(
            "/api/workouts/w-1/assign",
            json={"clientId": "not-a-uuid"},
            headers=harness.headers(Role.TRAINER),
        )

    assert response.status_code == 400
    assert response.get_json()["context"]["fields"] == ["clientId"]


@pytest.mark.parametrize(
    ("error", "status", "code"),
    [
        (WorkoutNotFoundError(), 404, "workout_not_found"),
        (WorkoutNotOwnedError(), 403, "workout_not_owned"),
        (AssignmentAlreadyExistsError(), 409, "assignment_exists"),
    ],
)
def test_assign_maps_domain_errors(
    harness: Harness, error: Exception, status: int, code: str
) -> None:
    harness.assign.execute.side_effect = error

    with harness.app.test_client() as client:
        response = client.post(
            "/api/workouts/w-1/assign",
            json={"clientId": CLIENT_ID},
            headers=harness.headers(Role.TRAINER),
        )

    assert response.status_code == status
    assert response.get_json()["error"] == code


def test_my_workouts_lists_assignments_with_trainer(harness: Harness) -> None:
    harness.my_workouts.execute.return_value = [
        AssignmentDetails(
            id="a-1",
            workout_id="w-1",
            client_id="client-1",
            status=AssignmentStatus.PENDING,
            assigned_date=NOW,
            workout=WorkoutRef(id="w-1", name="Leg Day", description="Squats"),
            trainer=UserRef(id="trainer-1", email="t@x.com"),
        )
    ]

    with harness.app.test_client() as client:
        response = client.get(
            "/api/workouts/my-workouts", headers=harness.headers(Role.CLIENT, "client-1")
        )

    assert response.status_code == 200
    harness.my_workouts.execute.assert_called_once_with("client-1")
    [assignment] = response.get_json()["data"]["assignments"]
    assert assignment["workout"]["trainer"] == {"id": "trainer-1", "email": "t@x.com"}
    assert assignment["assignedDate"].startswith("2025-03-01")


def test_unexpected_error_returns_generic_500(harness: Harness) -> None:
    harness.my_workouts.execute.side_effect = RuntimeError("db exploded at 10.0.0.1")

    with harness.app.test_client() as client:
        response = client.get(
            "/api/workouts/my-workouts", headers=harness.headers(Role.CLIENT, "client-1")
        )

    assert response.status_code == 500
    assert response.get_json() == {
        "success": False,
        "error": "internal_error",
        "message": "Internal server error",
    }


def test_unknown_route_returns_json_404(harness: Harness) -> None:
    with harness.app.test_client() as client:
        response = client.get("/api/nothing-here")

    assert response.status_code == 404
    assert response.get_json()["error"] == "route_not_found"


def test_workout_routes_are_rate_limited(codec: JwtTokenCodec) -> None:
    app = Flask(__name__)
    configure_error_handling(app)
    limited = Harness(app, codec, SecurityConfig(enable_rate_limit=True, rate_limit_requests=2))
    limited.my_workouts.execute.return_value = []

    with app.test_client() as client:
        statuses = [
            client.get(
                "/api/workouts/my-workouts", headers=limited.headers(Role.CLIENT, "client-1")
            ).status_code
            for _ in range(3)
        ]

    assert statuses == [200, 200, 429]
    assert limited.my_workouts.execute.call_count == 2
