# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from fitcoach.application.use_cases.workouts.assign_workout import AssignWorkoutUseCase
from fitcoach.application.use_cases.workouts.create_workout import CreateWorkoutUseCase
from fitcoach.application.use_cases.workouts.list_client_assignments import (
    ListClientAssignmentsUseCase,
)
from fitcoach.application.use_cases.workouts.list_trainer_workouts import (
    ListTrainerWorkoutsInput,
    ListTrainerWorkoutsUseCase,
)
from fitcoach.domain.users.entities import Role
from fitcoach.interfaces.http.auth import RoleGate, current_identity
from fitcoach.interfaces.http.dto.workouts import (
    AssignmentDataDTO,
    AssignmentDTO,
    AssignmentResponseDTO,
    AssignWorkoutRequestDTO,
    ClientAssignmentDTO,
    ClientAssignmentsDataDTO,
    ClientAssignmentsResponseDTO,
    CreatedWorkoutDTO,
    CreateWorkoutRequestDTO,
    WorkoutDataDTO,
    WorkoutListDataDTO,
    WorkoutListResponseDTO,
    WorkoutQueryDTO,
    WorkoutResponseDTO,
)
from fitcoach.shared.config import SecurityConfig
from fitcoach.shared.errors.validation import raise_validation_error
from fitcoach.shared.logging import logger
from fitcoach.shared.middleware.rate_limit import rate_limit


class WorkoutsController:
    def __init__(
        self,
        *,
        gate: RoleGate,
        create_workout: CreateWorkoutUseCase,
        list_trainer_workouts: ListTrainerWorkoutsUseCase,
        assign_workout: AssignWorkoutUseCase,
        list_client_assignments: ListClientAssignmentsUseCase,
        security: SecurityConfig,
    ) -> None:
        self._gate = gate
        self._create_workout = create_workout
        self._list_trainer_workouts = list_trainer_workouts
        self._assign_workout = assign_workout
        self._list_client_assignments = list_client_assignments
        self._security = security

    def create(self) -> tuple[Response, int]:
        try:
            dto = CreateWorkoutRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        identity = current_identity()
        workout = self._create_workout.execute(dto.name, dto.description, identity.user_id)

        payload = WorkoutResponseDTO(
            message="Workout created successfully",
            data=WorkoutDataDTO(workout=CreatedWorkoutDTO.from_created(workout, identity)),
        )
        return jsonify(payload.model_dump(mode="json", by_alias=True)), 201

    def list_workouts(self) -> tuple[Response, int]:
        try:
            query = WorkoutQueryDTO.model_validate(request.args.to_dict())
        except ValidationError as exc:
            raise_validation_error(exc)

        identity = current_identity()
        page = self._list_trainer_workouts.execute(
            ListTrainerWorkoutsInput(
                trainer_id=identity.user_id,
                page=query.page,
                limit=query.limit,
                search=query.search,
            )
        )

        payload = WorkoutListResponseDTO(
            message="Workouts retrieved successfully",
            data=WorkoutListDataDTO.from_domain(page),
        )
        return jsonify(payload.model_dump(mode="json", by_alias=True)), 200

    def assign(self, workout_id: str) -> tuple[Response, int]:
        try:
            dto = AssignWorkoutRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        identity = current_identity()
        details = self._assign_workout.execute(workout_id, str(dto.client_id), identity.user_id)

        logger.info(
            f"workouts.assign: responded workout_id={workout_id} by trainer_id={identity.user_id}"
        )
        payload = AssignmentResponseDTO(
            message="Workout assigned successfully",
            data=AssignmentDataDTO(assignment=AssignmentDTO.from_domain(details)),
        )
        return jsonify(payload.model_dump(mode="json", by_alias=True)), 201

    def my_workouts(self) -> tuple[Response, int]:
        identity = current_identity()
        assignments = self._list_client_assignments.execute(identity.user_id)

        payload = ClientAssignmentsResponseDTO(
            message="Assigned workouts retrieved successfully",
            data=ClientAssignmentsDataDTO(
                assignments=[ClientAssignmentDTO.from_domain(item) for item in assignments]
            ),
        )
        return jsonify(payload.model_dump(mode="json", by_alias=True)), 200

    def as_blueprint(self) -> Blueprint:
        limited = rate_limit(self._security)
        trainer_only = self._gate.require(Role.TRAINER)
        client_only = self._gate.require(Role.CLIENT)

        bp = Blueprint("workouts", __name__, url_prefix="/api/workouts")
        bp.add_url_rule("", view_func=limited(trainer_only(self.create)), methods=["POST"])
        bp.add_url_rule(
            "", view_func=limited(trainer_only(self.list_workouts)), methods=["GET"]
        )
        bp.add_url_rule(
            "/<workout_id>/assign",
            view_func=limited(trainer_only(self.assign)),
            methods=["POST"],
        )
        bp.add_url_rule(
            "/my-workouts", view_func=limited(client_only(self.my_workouts)), methods=["GET"]
        )
        return bp
