# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from fitcoach.domain.users.entities import LoginResult, TokenIdentity
from fitcoach.domain.users.exceptions import InvalidCredentialsError
from fitcoach.domain.users.repositories import PasswordHasher, TokenCodec, UserRepository
from fitcoach.shared.logging import logger

_DUMMY_PASSWORD = "fitcoach-unknown-account"


class LoginUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        tokens: TokenCodec,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._tokens = tokens
        self._password_hasher = password_hasher
        self._dummy_hash: str | None = None

    def _unknown_account_hash(self) -> str:
        if self._dummy_hash is None:
            self._dummy_hash = self._password_hasher.hash(_DUMMY_PASSWORD)
        return self._dummy_hash

    def execute(self, email: str, password: str) -> LoginResult:
        user = self._users.find_by_email(email)
        if user is None:
            # unknown accounts cost one hash check, same as a wrong password
            self._password_hasher.verify(password, self._unknown_account_hash())
            logger.info("auth.login: invalid credentials")
            raise InvalidCredentialsError()

        if not self._password_hasher.verify(password, user.password_hash):
            logger.info("auth.login: invalid credentials")
            raise InvalidCredentialsError()

        token = self._tokens.issue(
            TokenIdentity(user_id=user.id, email=user.email, role=user.role)
        )
        logger.info(f"auth.login: ok user_id={user.id}")
        return LoginResult(token=token, user=user.public())
