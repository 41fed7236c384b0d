# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import Select, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import joinedload

from fitcoach.domain.workouts.entities import AssignmentDetails
from fitcoach.domain.workouts.entities import Workout as DomainWorkout
from fitcoach.domain.workouts.entities import WorkoutAssignment as DomainAssignment
from fitcoach.domain.workouts.entities import (
    UserRef,
    WorkoutFilter,
    WorkoutRef,
    WorkoutSummary,
)
from fitcoach.domain.workouts.exceptions import AssignmentAlreadyExistsError
from fitcoach.domain.workouts.repositories import AssignmentRepository, WorkoutRepository
from fitcoach.infrastructure.db import SessionFactory
from fitcoach.infrastructure.db.models import Workout, WorkoutAssignment
from fitcoach.infrastructure.unit_of_work import unit_of_work_scope
from fitcoach.shared.errors import InfrastructureError


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _apply_filter(stmt: Select, criteria: WorkoutFilter) -> Select:
    stmt = stmt.where(Workout.trainer_id == criteria.trainer_id)
    if criteria.search:
        stmt = stmt.where(Workout.name.ilike(f"%{_escape_like(criteria.search)}%", escape="\\"))
    return stmt


def _workout_to_domain(row: Workout) -> DomainWorkout:
    return DomainWorkout(
        id=row.id,
        name=row.name,
        description=row.description,
        trainer_id=row.trainer_id,
        created_at=row.created_at,
    )


def _assignment_to_domain(row: WorkoutAssignment) -> DomainAssignment:
    return DomainAssignment(
        id=row.id,
        workout_id=row.workout_id,
        client_id=row.client_id,
        status=row.status,
        assigned_date=row.assigned_date,
    )


def _details(
    row: WorkoutAssignment, *, with_client: bool = False, with_trainer: bool = False
) -> AssignmentDetails:
    workout = row.workout
    return AssignmentDetails(
        id=row.id,
        workout_id=row.workout_id,
        client_id=row.client_id,
        status=row.status,
        assigned_date=row.assigned_date,
        workout=WorkoutRef(id=workout.id, name=workout.name, description=workout.description),
        client=UserRef(id=row.client.id, email=row.client.email) if with_client else None,
        trainer=(
            UserRef(id=workout.trainer.id, email=workout.trainer.email) if with_trainer else None
        ),
    )


class SqlAlchemyWorkoutRepository(WorkoutRepository):
    def __init__(self, session_factory: SessionFactory):
        self._session_factory = session_factory

    def add(self, workout: DomainWorkout) -> DomainWorkout:
        with unit_of_work_scope(self._session_factory) as session:
            row = Workout(
                name=workout.name,
                description=workout.description,
                trainer_id=workout.trainer_id,
                created_at=workout.created_at,
            )
            session.add(row)
            session.flush()
            return _workout_to_domain(row)

    def find_by_id(self, workout_id: str) -> DomainWorkout | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.get(Workout, workout_id)
            return _workout_to_domain(row) if row else None

    def list_summaries(
        self, criteria: WorkoutFilter, *, offset: int, limit: int
    ) -> Sequence[WorkoutSummary]:
        assignment_count = (
            select(func.count(WorkoutAssignment.id))
            .where(WorkoutAssignment.workout_id == Workout.id)
            .correlate(Workout)
            .scalar_subquery()
        )
        stmt = _apply_filter(select(Workout, assignment_count), criteria)
        stmt = stmt.order_by(Workout.created_at.desc(), Workout.id.desc()).offset(offset).limit(limit)

        with unit_of_work_scope(self._session_factory) as session:
            rows = session.execute(stmt).all()
            return [
                WorkoutSummary(
                    id=row.id,
                    name=row.name,
                    description=row.description,
                    trainer_id=row.trainer_id,
                    created_at=row.created_at,
                    assignment_count=int(count or 0),
                )
                for row, count in rows
            ]

    def count(self, criteria: WorkoutFilter) -> int:
        stmt = _apply_filter(select(func.count(Workout.id)), criteria)
        with unit_of_work_scope(self._session_factory) as session:
            return int(session.scalar(stmt) or 0)


class SqlAlchemyAssignmentRepository(AssignmentRepository):
    def __init__(self, session_factory: SessionFactory):
        self._session_factory = session_factory

    def find_by_pair(self, workout_id: str, client_id: str) -> DomainAssignment | None:
        stmt = select(WorkoutAssignment).where(
            WorkoutAssignment.workout_id == workout_id,
            WorkoutAssignment.client_id == client_id,
        )
        with unit_of_work_scope(self._session_factory) as session:
            row = session.scalars(stmt).first()
            return _assignment_to_domain(row) if row else None

    def add(self, assignment: DomainAssignment) -> AssignmentDetails:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                row = WorkoutAssignment(
                    workout_id=assignment.workout_id,
                    client_id=assignment.client_id,
                    status=assignment.status,
                    assigned_date=assignment.assigned_date,
                )
                session.add(row)
                session.flush()
                return _details(row, with_client=True)
        except IntegrityError as exc:
            if self.find_by_pair(assignment.workout_id, assignment.client_id) is not None:
                raise AssignmentAlreadyExistsError(cause=exc) from exc
            raise InfrastructureError("assignment_insert_failed", cause=exc) from exc

    def list_for_client(self, client_id: str) -> Sequence[AssignmentDetails]:
        stmt = (
            select(WorkoutAssignment)
            .options(joinedload(WorkoutAssignment.workout).joinedload(Workout.trainer))
            .where(WorkoutAssignment.client_id == client_id)
            .order_by(WorkoutAssignment.assigned_date.desc(), WorkoutAssignment.id.desc())
        )
        with unit_of_work_scope(self._session_factory) as session:
            rows = session.scalars(stmt).all()
            return [_details(row, with_trainer=True) for row in rows]
