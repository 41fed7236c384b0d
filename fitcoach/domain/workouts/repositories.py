# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from .entities import (
    AssignmentDetails,
    Workout,
    WorkoutAssignment,
    WorkoutFilter,
    WorkoutSummary,
)


class WorkoutRepository(Protocol):
    def add(self, workout: Workout) -> Workout: ...
    def find_by_id(self, workout_id: str) -> Workout | None: ...

    def list_summaries(
        self, criteria: WorkoutFilter, *, offset: int, limit: int
    ) -> Sequence[WorkoutSummary]: ...

    def count(self, criteria: WorkoutFilter) -> int: ...


class AssignmentRepository(Protocol):
    def find_by_pair(self, workout_id: str, client_id: str) -> WorkoutAssignment | None: ...
    def add(self, assignment: WorkoutAssignment) -> AssignmentDetails: ...
    def list_for_client(self, client_id: str) -> Sequence[AssignmentDetails]: ...
