# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class AssignmentStatus(str, Enum):
    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"


@dataclass(slots=True, frozen=True)
class Workout:

    id: str
    name: str
    description: str | None
    trainer_id: str
    created_at: datetime


@dataclass(slots=True, frozen=True)
class WorkoutSummary:

    id: str
    name: str
    description: str | None
    trainer_id: str
    created_at: datetime
    assignment_count: int = 0


@dataclass(slots=True, frozen=True)
class WorkoutFilter:
    trainer_id: str
    search: str = ""


@dataclass(slots=True, frozen=True)
class Pagination:

    page: int
    limit: int
    total: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit)


@dataclass(slots=True, frozen=True)
class WorkoutPage:

    items: list[WorkoutSummary]
    pagination: Pagination


@dataclass(slots=True, frozen=True)
class WorkoutAssignment:

    id: str
    workout_id: str
    client_id: str
    status: AssignmentStatus
    assigned_date: datetime


@dataclass(slots=True, frozen=True)
class WorkoutRef:
    id: str
    name: str
    description: str | None


@dataclass(slots=True, frozen=True)
class UserRef:
    id: str
    email: str


@dataclass(slots=True, frozen=True)
class AssignmentDetails:
    """Assignment joined with the workout and the people on either side of it."""

    id: str
    workout_id: str
    client_id: str
    status: AssignmentStatus
    assigned_date: datetime
    workout: WorkoutRef
    client: UserRef | None = None
    trainer: UserRef | None = None
