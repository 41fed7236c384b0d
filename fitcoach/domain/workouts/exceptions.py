# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from fitcoach.shared.errors.base import DomainError, ErrorKind


class WorkoutNotFoundError(DomainError):
    default_kind = ErrorKind.NOT_FOUND
    default_code = "workout_not_found"
    default_message = "Workout not found"


class WorkoutNotOwnedError(DomainError):
    default_kind = ErrorKind.FORBIDDEN
    default_code = "workout_not_owned"
    default_message = "You can only assign your own workouts"


class ClientNotFoundError(DomainError):
    default_kind = ErrorKind.NOT_FOUND
    default_code = "client_not_found"
    default_message = "Client not found"


class AssigneeNotClientError(DomainError):
    default_kind = ErrorKind.FORBIDDEN
    default_code = "assignee_not_client"
    default_message = "Can only assign workouts to clients"


class AssignmentAlreadyExistsError(DomainError):
    default_kind = ErrorKind.CONFLICT
    default_code = "assignment_exists"
    default_message = "Workout already assigned to this client"


class InvalidPaginationError(DomainError):
    default_kind = ErrorKind.INVALID_INPUT
    default_code = "invalid_pagination"
    default_message = "Page and limit must be at least 1"
