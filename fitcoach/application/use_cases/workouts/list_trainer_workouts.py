# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass

from fitcoach.domain.workouts.entities import Pagination, WorkoutFilter, WorkoutPage
from fitcoach.domain.workouts.exceptions import InvalidPaginationError
from fitcoach.domain.workouts.repositories import WorkoutRepository


@dataclass(slots=True, frozen=True)
class ListTrainerWorkoutsInput:
    trainer_id: str
    page: int = 1
    limit: int = 10
    search: str = ""


class ListTrainerWorkoutsUseCase:
    """Newest-first page of a trainer's workouts, optionally filtered by name.

    The total is counted over the same filter and is not affected by the
    requested page.
    """

    def __init__(self, *, workouts: WorkoutRepository) -> None:
        self._workouts = workouts

    def execute(self, data: ListTrainerWorkoutsInput) -> WorkoutPage:
        if data.page < 1 or data.limit < 1:
            raise InvalidPaginationError(context={"page": data.page, "limit": data.limit})

        criteria = WorkoutFilter(trainer_id=data.trainer_id, search=data.search or "")
        offset = (data.page - 1) * data.limit
        items = list(self._workouts.list_summaries(criteria, offset=offset, limit=data.limit))
        total = self._workouts.count(criteria)

        return WorkoutPage(
            items=items,
            pagination=Pagination(page=data.page, limit=data.limit, total=total),
        )
