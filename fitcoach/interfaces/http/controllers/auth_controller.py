# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from fitcoach.application.use_cases.users.login_user import LoginUserUseCase
from fitcoach.application.use_cases.users.register_user import RegisterUserUseCase
from fitcoach.interfaces.http.dto.auth import (
    LoginDataDTO,
    LoginRequestDTO,
    LoginResponseDTO,
    RegisterDataDTO,
    RegisterRequestDTO,
    RegisterResponseDTO,
    UserDTO,
)
from fitcoach.shared.config import SecurityConfig
from fitcoach.shared.errors.validation import raise_validation_error
from fitcoach.shared.logging import logger
from fitcoach.shared.middleware.rate_limit import rate_limit


class AuthController:
    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
        security: SecurityConfig,
    ) -> None:
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case
        self._security = security

    def register(self) -> tuple[Response, int]:
        try:
            dto = RegisterRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        user = self._register_use_case.execute(dto.email, dto.password, dto.role)

        payload = RegisterResponseDTO(
            message="User registered successfully",
            data=RegisterDataDTO(user=UserDTO.from_domain(user)),
        )
        logger.info(f"auth.register: responded user_id={user.id} role={user.role.value}")
        return jsonify(payload.model_dump(mode="json", by_alias=True)), 201

    def login(self) -> tuple[Response, int]:
        try:
            dto = LoginRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        result = self._login_use_case.execute(dto.email, dto.password)

        payload = LoginResponseDTO(
            message="Login successful",
            data=LoginDataDTO.from_domain(result),
        )
        return jsonify(payload.model_dump(mode="json", by_alias=True)), 200

    def as_blueprint(self) -> Blueprint:
        limited = rate_limit(self._security)
        bp = Blueprint("auth", __name__, url_prefix="/api/auth")
        bp.add_url_rule("/register", view_func=limited(self.register), methods=["POST"])
        bp.add_url_rule("/login", view_func=limited(self.login), methods=["POST"])
        return bp
