from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import Field, field_validator

from fitcoach.domain.users.entities import TokenIdentity
from fitcoach.domain.workouts.entities import (
    AssignmentDetails,
    Workout,
    WorkoutPage,
    WorkoutSummary,
)

from .base import CamelModel, Envelope


class CreateWorkoutRequestDTO(CamelModel):
    name: str = Field(min_length=3, max_length=100)
    description: str | None = Field(default=None, max_length=500)

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value

    @field_validator("description")
    @classmethod
    def _blank_description(cls, value: str | None) -> str | None:
        return value or None


class AssignWorkoutRequestDTO(CamelModel):
    client_id: UUID


class WorkoutQueryDTO(CamelModel):
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1, le=100)
    search: str = Field(default="", max_length=100)


class WorkoutDTO(CamelModel):
    id: str
    name: str
    description: str | None
    trainer_id: str
    created_at: datetime


class TrainerDTO(CamelModel):
    id: str
    email: str
    role: str


class CreatedWorkoutDTO(WorkoutDTO):
    trainer: TrainerDTO

    @classmethod
    def from_created(cls, workout: Workout, trainer: TokenIdentity) -> CreatedWorkoutDTO:
        return cls(
            id=workout.id,
            name=workout.name,
            description=workout.description,
            trainer_id=workout.trainer_id,
            created_at=workout.created_at,
            trainer=TrainerDTO(id=trainer.user_id, email=trainer.email, role=trainer.role.value),
        )


class WorkoutSummaryDTO(WorkoutDTO):
    assignment_count: int

    @classmethod
    def from_summary(cls, summary: WorkoutSummary) -> WorkoutSummaryDTO:
        return cls(
            id=summary.id,
            name=summary.name,
            description=summary.description,
            trainer_id=summary.trainer_id,
            created_at=summary.created_at,
            assignment_count=summary.assignment_count,
        )


class PaginationDTO(CamelModel):
    page: int
    limit: int
    total: int
    total_pages: int


class UserRefDTO(CamelModel):
    id: str
    email: str


class WorkoutRefDTO(CamelModel):
    id: str
    name: str
    description: str | None


class AssignedWorkoutDTO(WorkoutRefDTO):
    trainer: UserRefDTO | None


class AssignmentDTO(CamelModel):
    id: str
    workout_id: str
    client_id: str
    status: str
    assigned_date: datetime
    workout: WorkoutRefDTO
    client: UserRefDTO | None

    @classmethod
    def from_domain(cls, details: AssignmentDetails) -> AssignmentDTO:
        return cls(
            id=details.id,
            workout_id=details.workout_id,
            client_id=details.client_id,
            status=details.status.value,
            assigned_date=details.assigned_date,
            workout=WorkoutRefDTO(
                id=details.workout.id,
                name=details.workout.name,
                description=details.workout.description,
            ),
            client=(
                UserRefDTO(id=details.client.id, email=details.client.email)
                if details.client
                else None
            ),
        )


class ClientAssignmentDTO(CamelModel):
    id: str
    workout_id: str
    client_id: str
    status: str
    assigned_date: datetime
    workout: AssignedWorkoutDTO

    @classmethod
    def from_domain(cls, details: AssignmentDetails) -> ClientAssignmentDTO:
        trainer = details.trainer
        return cls(
            id=details.id,
            workout_id=details.workout_id,
            client_id=details.client_id,
            status=details.status.value,
            assigned_date=details.assigned_date,
            workout=AssignedWorkoutDTO(
                id=details.workout.id,
                name=details.workout.name,
                description=details.workout.description,
                trainer=UserRefDTO(id=trainer.id, email=trainer.email) if trainer else None,
            ),
        )


class WorkoutDataDTO(CamelModel):
    workout: CreatedWorkoutDTO


class WorkoutListDataDTO(CamelModel):
    workouts: list[WorkoutSummaryDTO]
    pagination: PaginationDTO

    @classmethod
    def from_domain(cls, page: WorkoutPage) -> WorkoutListDataDTO:
        pagination = page.pagination
        return cls(
            workouts=[WorkoutSummaryDTO.from_summary(item) for item in page.items],
            pagination=PaginationDTO(
                page=pagination.page,
                limit=pagination.limit,
                total=pagination.total,
                total_pages=pagination.total_pages,
            ),
        )


class AssignmentDataDTO(CamelModel):
    assignment: AssignmentDTO


class ClientAssignmentsDataDTO(CamelModel):
    assignments: list[ClientAssignmentDTO]


class WorkoutResponseDTO(Envelope):
    data: WorkoutDataDTO


class WorkoutListResponseDTO(Envelope):
    data: WorkoutListDataDTO


class AssignmentResponseDTO(Envelope):
    data: AssignmentDataDTO


class ClientAssignmentsResponseDTO(Envelope):
    data: ClientAssignmentsDataDTO
