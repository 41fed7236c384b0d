# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime

from fitcoach.domain.users.entities import PublicUser, Role, User
from fitcoach.domain.users.exceptions import InvalidRoleError, UserAlreadyExistsError
from fitcoach.domain.users.repositories import PasswordHasher, UserRepository
from fitcoach.shared.logging import logger


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher

    def execute(self, email: str, password: str, role: str | Role = Role.CLIENT) -> PublicUser:
        existing = self._users.find_by_email(email)
        if existing:
            logger.info("auth.register: rejected, email already registered")
            raise UserAlreadyExistsError()

        parsed_role = Role.parse(role)
        if parsed_role is None:
            raise InvalidRoleError(context={"role": str(role)})

        hashed = self._password_hasher.hash(password)
        user = User(
            id="",
            email=email,
            password_hash=hashed,
            role=parsed_role,
            created_at=datetime.now(UTC),
        )
        # add() raises UserAlreadyExistsError when a concurrent insert wins the unique index
        persisted = self._users.add(user)
        logger.info(f"auth.register: ok user_id={persisted.id} role={persisted.role.value}")
        return persisted.public()
