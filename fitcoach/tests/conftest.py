from __future__ import annotations

import os
import tempfile
import uuid
from dataclasses import replace
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

os.environ.setdefault("LOG_FILE", str(Path(tempfile.gettempdir()) / "fitcoach-tests.log"))

from fitcoach.application.services.token_codec import JwtTokenCodec
from fitcoach.domain.users.entities import Role, User
from fitcoach.domain.users.exceptions import UserAlreadyExistsError
from fitcoach.domain.users.repositories import PasswordHasher, UserRepository
from fitcoach.domain.workouts.entities import (
    AssignmentDetails,
    UserRef,
    Workout,
    WorkoutAssignment,
    WorkoutFilter,
    WorkoutRef,
    WorkoutSummary,
)
from fitcoach.domain.workouts.exceptions import AssignmentAlreadyExistsError
from fitcoach.domain.workouts.repositories import AssignmentRepository, WorkoutRepository
from fitcoach.shared.config import AppConfig, AuthConfig, DatabaseConfig, SecurityConfig

TEST_SECRET = "test-signing-secret"


class InMemoryStore:
    def __init__(self) -> None:
        self.users: dict[str, User] = {}
        self.workouts: dict[str, Workout] = {}
        self.assignments: dict[str, WorkoutAssignment] = {}
        self.seq: dict[str, int] = {}
        self._counter = 0

    def next_id(self) -> str:
        value = str(uuid.uuid4())
        self._counter += 1
        self.seq[value] = self._counter
        return value


class InMemoryUserRepository(UserRepository):
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    def find_by_email(self, email: str) -> User | None:
        return next((u for u in self._store.users.values() if u.email == email), None)

    def find_by_id(self, user_id: str) -> User | None:
        return self._store.users.get(user_id)

    def add(self, user: User) -> User:
        if self.find_by_email(user.email) is not None:
            raise UserAlreadyExistsError()
        new_user = replace(user, id=self._store.next_id())
        self._store.users[new_user.id] = new_user
        return new_user


class InMemoryWorkoutRepository(WorkoutRepository):
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    def add(self, workout: Workout) -> Workout:
        new_workout = replace(workout, id=self._store.next_id())
        self._store.workouts[new_workout.id] = new_workout
        return new_workout

    def find_by_id(self, workout_id: str) -> Workout | None:
        return self._store.workouts.get(workout_id)

    def _matching(self, criteria: WorkoutFilter) -> list[Workout]:
        term = criteria.search.lower()
        return [
            w
            for w in self._store.workouts.values()
            if w.trainer_id == criteria.trainer_id and (not term or term in w.name.lower())
        ]

    def list_summaries(
        self, criteria: WorkoutFilter, *, offset: int, limit: int
    ) -> list[WorkoutSummary]:
        rows = sorted(
            self._matching(criteria),
            key=lambda w: (w.created_at, self._store.seq[w.id]),
            reverse=True,
        )
        return [
            WorkoutSummary(
                id=w.id,
                name=w.name,
                description=w.description,
                trainer_id=w.trainer_id,
                created_at=w.created_at,
                assignment_count=sum(
                    1 for a in self._store.assignments.values() if a.workout_id == w.id
                ),
            )
            for w in rows[offset : offset + limit]
        ]

    def count(self, criteria: WorkoutFilter) -> int:
        return len(self._matching(criteria))


class InMemoryAssignmentRepository(AssignmentRepository):
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    def find_by_pair(self, workout_id: str, client_id: str) -> WorkoutAssignment | None:
        return next(
            (
                a
                for a in self._store.assignments.values()
                if a.workout_id == workout_id and a.client_id == client_id
            ),
            None,
        )

    def _details(self, assignment: WorkoutAssignment, *, with_client: bool) -> AssignmentDetails:
        workout = self._store.workouts[assignment.workout_id]
        client = self._store.users[assignment.client_id]
        trainer = self._store.users[workout.trainer_id]
        return AssignmentDetails(
            id=assignment.id,
            workout_id=assignment.workout_id,
            client_id=assignment.client_id,
            status=assignment.status,
            assigned_date=assignment.assigned_date,
            workout=WorkoutRef(id=workout.id, name=workout.name, description=workout.description),
            client=UserRef(id=client.id, email=client.email) if with_client else None,
            trainer=None if with_client else UserRef(id=trainer.id, email=trainer.email),
        )

    def add(self, assignment: WorkoutAssignment) -> AssignmentDetails:
        if self.find_by_pair(assignment.workout_id, assignment.client_id) is not None:
            raise AssignmentAlreadyExistsError()
        new_assignment = replace(assignment, id=self._store.next_id())
        self._store.assignments[new_assignment.id] = new_assignment
        return self._details(new_assignment, with_client=True)

    def list_for_client(self, client_id: str) -> list[AssignmentDetails]:
        rows = sorted(
            (a for a in self._store.assignments.values() if a.client_id == client_id),
            key=lambda a: (a.assigned_date, self._store.seq[a.id]),
            reverse=True,
        )
        return [self._details(a, with_client=False) for a in rows]


class DeterministicHasher(PasswordHasher):
    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, password: str, hashed: str) -> bool:
        return hashed == f"hashed:{password}"


def make_user(store: InMemoryStore, email: str, role: Role) -> User:
    user = User(
        id=store.next_id(),
        email=email,
        password_hash="hashed:password123",
        role=role,
        created_at=datetime.now(UTC),
    )
    store.users[user.id] = user
    return user


@pytest.fixture()
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture()
def users(store: InMemoryStore) -> InMemoryUserRepository:
    return InMemoryUserRepository(store)


@pytest.fixture()
def workouts(store: InMemoryStore) -> InMemoryWorkoutRepository:
    return InMemoryWorkoutRepository(store)


@pytest.fixture()
def assignments(store: InMemoryStore) -> InMemoryAssignmentRepository:
    return InMemoryAssignmentRepository(store)


@pytest.fixture()
def hasher() -> DeterministicHasher:
    return DeterministicHasher()


@pytest.fixture()
def codec() -> JwtTokenCodec:
    return JwtTokenCodec(secret=TEST_SECRET, ttl=timedelta(hours=1))


@pytest.fixture()
def app_config() -> AppConfig:
    return AppConfig(
        app_env="test",
        database=DatabaseConfig(url="sqlite://"),
        auth=AuthConfig(
            jwt_secret=TEST_SECRET,
            jwt_expires_in=3600,
            password_hash_method="pbkdf2:sha256:1000",
        ),
        security=SecurityConfig(enable_rate_limit=False),
    )
