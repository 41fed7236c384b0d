# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .services.password_hashing import WerkzeugPasswordHasher
from .services.token_codec import JwtTokenCodec
from .use_cases.users.login_user import LoginUserUseCase
from .use_cases.users.register_user import RegisterUserUseCase
from .use_cases.users.verify_token import VerifyTokenUseCase
from .use_cases.workouts.assign_workout import AssignWorkoutUseCase
from .use_cases.workouts.create_workout import CreateWorkoutUseCase
from .use_cases.workouts.list_client_assignments import ListClientAssignmentsUseCase
from .use_cases.workouts.list_trainer_workouts import (
    ListTrainerWorkoutsInput,
    ListTrainerWorkoutsUseCase,
)

__all__ = [
    "WerkzeugPasswordHasher",
    "JwtTokenCodec",
    "LoginUserUseCase",
    "RegisterUserUseCase",
    "VerifyTokenUseCase",
    "AssignWorkoutUseCase",
    "CreateWorkoutUseCase",
    "ListClientAssignmentsUseCase",
    "ListTrainerWorkoutsInput",
    "ListTrainerWorkoutsUseCase",
]
