# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import timedelta
from functools import cached_property

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from fitcoach.application.services.password_hashing import WerkzeugPasswordHasher
from fitcoach.application.services.token_codec import JwtTokenCodec
from fitcoach.application.use_cases.users.login_user import LoginUserUseCase
from fitcoach.application.use_cases.users.register_user import RegisterUserUseCase
from fitcoach.application.use_cases.users.verify_token import VerifyTokenUseCase
from fitcoach.application.use_cases.workouts.assign_workout import AssignWorkoutUseCase
from fitcoach.application.use_cases.workouts.create_workout import CreateWorkoutUseCase
from fitcoach.application.use_cases.workouts.list_client_assignments import \
    ListClientAssignmentsUseCase
from fitcoach.application.use_cases.workouts.list_trainer_workouts import \
    ListTrainerWorkoutsUseCase
from fitcoach.infrastructure.db import build_engine, build_session_factory
from fitcoach.infrastructure.repositories.users.sqlalchemy_user_repository import \
    SqlAlchemyUserRepository
from fitcoach.infrastructure.repositories.workouts.sqlalchemy_workout_repository import (
    SqlAlchemyAssignmentRepository, SqlAlchemyWorkoutRepository)
from fitcoach.interfaces.http.auth import RoleGate
from fitcoach.interfaces.http.controllers.auth_controller import AuthController
from fitcoach.interfaces.http.controllers.misc_controller import MiscController
from fitcoach.interfaces.http.controllers.workouts_controller import WorkoutsController
from fitcoach.shared.config import AppConfig


class Container:
    def __init__(self, config: AppConfig) -> None:
        self.config = config

    # Persistence

    @cached_property
    def engine(self) -> Engine:
        return build_engine(self.config.database)

    @cached_property
    def session_factory(self) -> sessionmaker[Session]:
        return build_session_factory(self.engine)

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository(self.session_factory)

    @cached_property
    def workout_repository(self) -> SqlAlchemyWorkoutRepository:
        return SqlAlchemyWorkoutRepository(self.session_factory)

    @cached_property
    def assignment_repository(self) -> SqlAlchemyAssignmentRepository:
        return SqlAlchemyAssignmentRepository(self.session_factory)

    # Auth

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher(self.config.auth.password_hash_method)

    @cached_property
    def token_codec(self) -> JwtTokenCodec:
        return JwtTokenCodec(
            secret=self.config.auth.jwt_secret,
            ttl=timedelta(seconds=self.config.auth.jwt_expires_in),
        )

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.user_repository,
            tokens=self.token_codec,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def verify_token_use_case(self) -> VerifyTokenUseCase:
        return VerifyTokenUseCase(tokens=self.token_codec)

    @cached_property
    def role_gate(self) -> RoleGate:
        return RoleGate(verify_token=self.verify_token_use_case)

    # Workouts

    @cached_property
    def create_workout_use_case(self) -> CreateWorkoutUseCase:
        return CreateWorkoutUseCase(workouts=self.workout_repository)

    @cached_property
    def list_trainer_workouts_use_case(self) -> ListTrainerWorkoutsUseCase:
        return ListTrainerWorkoutsUseCase(workouts=self.workout_repository)

    @cached_property
    def assign_workout_use_case(self) -> AssignWorkoutUseCase:
        return AssignWorkoutUseCase(
            workouts=self.workout_repository,
            assignments=self.assignment_repository,
            users=self.user_repository,
        )

    @cached_property
    def list_client_assignments_use_case(self) -> ListClientAssignmentsUseCase:
        return ListClientAssignmentsUseCase(assignments=self.assignment_repository)

    # Controllers

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
            security=self.config.security,
        )

    @cached_property
    def workouts_controller(self) -> WorkoutsController:
        return WorkoutsController(
            gate=self.role_gate,
            create_workout=self.create_workout_use_case,
            list_trainer_workouts=self.list_trainer_workouts_use_case,
            assign_workout=self.assign_workout_use_case,
            list_client_assignments=self.list_client_assignments_use_case,
            security=self.config.security,
        )

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController(engine=self.engine)
