# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime

from fitcoach.domain.users.entities import Role
from fitcoach.domain.users.repositories import UserRepository
from fitcoach.domain.workouts.entities import (
    AssignmentDetails,
    AssignmentStatus,
    WorkoutAssignment,
)
from fitcoach.domain.workouts.exceptions import (
    AssigneeNotClientError,
    AssignmentAlreadyExistsError,
    ClientNotFoundError,
    WorkoutNotFoundError,
    WorkoutNotOwnedError,
)
from fitcoach.domain.workouts.repositories import AssignmentRepository, WorkoutRepository
from fitcoach.shared.logging import logger


class AssignWorkoutUseCase:
    """Assign a trainer's own workout to a client.

    Checks run in a fixed order: workout existence, ownership, client
    existence, client role, duplicate pair. Callers can rely on that
    precedence when several conditions fail at once.
    """

    def __init__(
        self,
        *,
        workouts: WorkoutRepository,
        assignments: AssignmentRepository,
        users: UserRepository,
    ) -> None:
        self._workouts = workouts
        self._assignments = assignments
        self._users = users

    def execute(self, workout_id: str, client_id: str, trainer_id: str) -> AssignmentDetails:
        workout = self._workouts.find_by_id(workout_id)
        if workout is None:
            raise WorkoutNotFoundError(context={"workout_id": workout_id})

        if workout.trainer_id != trainer_id:
            logger.warning(
                f"workouts.assign: trainer_id={trainer_id} does not own workout_id={workout_id}"
            )
            raise WorkoutNotOwnedError()

        client = self._users.find_by_id(client_id)
        if client is None:
            raise ClientNotFoundError(context={"client_id": client_id})

        if client.role is not Role.CLIENT:
            raise AssigneeNotClientError()

        if self._assignments.find_by_pair(workout_id, client_id) is not None:
            logger.info(
                f"workouts.assign: conflict workout_id={workout_id} client_id={client_id}"
            )
            raise AssignmentAlreadyExistsError()

        assignment = WorkoutAssignment(
            id="",
            workout_id=workout_id,
            client_id=client_id,
            status=AssignmentStatus.PENDING,
            assigned_date=datetime.now(UTC),
        )
        details = self._assignments.add(assignment)
        logger.info(
            f"workouts.assign: ok assignment_id={details.id} "
            f"workout_id={workout_id} client_id={client_id}"
        )
        return details
