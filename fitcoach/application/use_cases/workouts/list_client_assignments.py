# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from fitcoach.domain.workouts.entities import AssignmentDetails
from fitcoach.domain.workouts.repositories import AssignmentRepository


class ListClientAssignmentsUseCase:
    def __init__(self, *, assignments: AssignmentRepository) -> None:
        self._assignments = assignments

    def execute(self, client_id: str) -> list[AssignmentDetails]:
        return list(self._assignments.list_for_client(client_id))
