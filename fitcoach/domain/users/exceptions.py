# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from fitcoach.shared.errors.base import DomainError, ErrorKind


class UserAlreadyExistsError(DomainError):
    default_kind = ErrorKind.CONFLICT
    default_code = "user_already_exists"
    default_message = "User with this email already exists"


class InvalidRoleError(DomainError):
    default_kind = ErrorKind.INVALID_INPUT
    default_code = "invalid_role"
    default_message = "Role must be either TRAINER or CLIENT"


class InvalidCredentialsError(DomainError):
    default_kind = ErrorKind.UNAUTHENTICATED
    default_code = "invalid_credentials"
    default_message = "Invalid email or password"


class InvalidTokenError(DomainError):
    default_kind = ErrorKind.UNAUTHENTICATED
    default_code = "invalid_token"
    default_message = "Invalid token"


class TokenExpiredError(DomainError):
    default_kind = ErrorKind.UNAUTHENTICATED
    default_code = "token_expired"
    default_message = "Token has expired"
