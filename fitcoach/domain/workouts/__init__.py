# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import (
    AssignmentDetails,
    AssignmentStatus,
    Pagination,
    UserRef,
    Workout,
    WorkoutAssignment,
    WorkoutFilter,
    WorkoutPage,
    WorkoutRef,
    WorkoutSummary,
)
from .exceptions import (
    AssigneeNotClientError,
    AssignmentAlreadyExistsError,
    ClientNotFoundError,
    InvalidPaginationError,
    WorkoutNotFoundError,
    WorkoutNotOwnedError,
)
from .repositories import AssignmentRepository, WorkoutRepository

__all__ = [
    "AssignmentDetails",
    "AssignmentStatus",
    "Pagination",
    "UserRef",
    "Workout",
    "WorkoutAssignment",
    "WorkoutFilter",
    "WorkoutPage",
    "WorkoutRef",
    "WorkoutSummary",
    "AssigneeNotClientError",
    "AssignmentAlreadyExistsError",
    "ClientNotFoundError",
    "InvalidPaginationError",
    "WorkoutNotFoundError",
    "WorkoutNotOwnedError",
    "AssignmentRepository",
    "WorkoutRepository",
]
