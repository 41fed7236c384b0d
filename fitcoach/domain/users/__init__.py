# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import LoginResult, PublicUser, Role, TokenIdentity, User
from .exceptions import (
    InvalidCredentialsError,
    InvalidRoleError,
    InvalidTokenError,
    TokenExpiredError,
    UserAlreadyExistsError,
)
from .repositories import PasswordHasher, TokenCodec, UserRepository

__all__ = [
    "LoginResult",
    "PublicUser",
    "Role",
    "TokenIdentity",
    "User",
    "InvalidCredentialsError",
    "InvalidRoleError",
    "InvalidTokenError",
    "TokenExpiredError",
    "UserAlreadyExistsError",
    "PasswordHasher",
    "TokenCodec",
    "UserRepository",
]
