# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime

from fitcoach.domain.workouts.entities import Workout
from fitcoach.domain.workouts.repositories import WorkoutRepository
from fitcoach.shared.logging import logger


class CreateWorkoutUseCase:
    def __init__(self, *, workouts: WorkoutRepository) -> None:
        self._workouts = workouts

    def execute(self, name: str, description: str | None, trainer_id: str) -> Workout:
        workout = Workout(
            id="",
            name=name,
            description=description or None,
            trainer_id=trainer_id,
            created_at=datetime.now(UTC),
        )
        persisted = self._workouts.add(workout)
        logger.info(f"workouts.create: ok workout_id={persisted.id} trainer_id={trainer_id}")
        return persisted
