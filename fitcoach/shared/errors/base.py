# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, cast


class ErrorKind(str, Enum):
    INVALID_INPUT = "invalid_input"
    CONFLICT = "conflict"
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    INTERNAL = "internal"


@dataclass(slots=True, eq=False)
class AppError(Exception):
    kind: ErrorKind
    code: str
    message: str
    context: Mapping[str, Any] | None = None
    cause: BaseException | None = None

    def __post_init__(self) -> None:
        Exception.__init__(self, self.message)
        if self.cause is not None:
            self.__cause__ = self.cause

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "success": False,
            "error": self.code,
            "message": self.message,
        }
        if self.context:
            payload["context"] = dict(self.context)
        return payload


class DomainError(AppError):
    """Business-rule failure with class-level defaults.

    Subclasses set ``kind``, ``code`` and ``message`` as class attributes and
    may override any of them per instance.
    """

    def __init__(
        self,
        message: str | None = None,
        *,
        code: str | None = None,
        context: Mapping[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        cls = type(self)
        super().__init__(
            kind=cast(ErrorKind, getattr(cls, "default_kind", ErrorKind.INVALID_INPUT)),
            code=code or cast(str, getattr(cls, "default_code", "domain_error")),
            message=message or cast(str, getattr(cls, "default_message", "Request failed")),
            context=context,
            cause=cause,
        )


class InfrastructureError(AppError):
    def __init__(
        self,
        code: str = "infrastructure_error",
        *,
        message: str = "Internal server error",
        context: Mapping[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(
            kind=ErrorKind.INTERNAL,
            code=code,
            message=message,
            context=context,
            cause=cause,
        )


class ValidationError(AppError):
    def __init__(
        self,
        code: str = "validation_error",
        *,
        message: str = "Request validation failed",
        context: Mapping[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(
            kind=ErrorKind.INVALID_INPUT,
            code=code,
            message=message,
            context=context,
            cause=cause,
        )


class AuthenticationRequiredError(DomainError):
    default_kind = ErrorKind.UNAUTHENTICATED
    default_code = "unauthorized"
    default_message = "No token provided"


class RoleForbiddenError(DomainError):
    default_kind = ErrorKind.FORBIDDEN
    default_code = "forbidden_role"
    default_message = "Access denied"
