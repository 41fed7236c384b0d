from __future__ import annotations

import re
from datetime import datetime

from pydantic import Field, field_validator
from pydantic_core import PydanticCustomError

from fitcoach.domain.users.entities import LoginResult, PublicUser

from .base import CamelModel, Envelope

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _validate_email(value: str) -> str:
    value = value.strip()
    if not _EMAIL_RE.match(value):
        raise PydanticCustomError(
            "email_invalid",
            "Please provide a valid email address",
            {},
        )
    return value


class RegisterRequestDTO(CamelModel):
    email: str = Field(min_length=3, max_length=254)
    password: str = Field(min_length=6, max_length=128)
    # checked against the allowed roles by the register use case
    role: str = "CLIENT"

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return _validate_email(value)


class LoginRequestDTO(CamelModel):
    email: str = Field(min_length=3, max_length=254)
    password: str = Field(min_length=1, max_length=128)

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return _validate_email(value)


class UserDTO(CamelModel):
    id: str
    email: str
    role: str
    created_at: datetime | None = None

    @classmethod
    def from_domain(cls, user: PublicUser) -> UserDTO:
        return cls(id=user.id, email=user.email, role=user.role.value, created_at=user.created_at)


class RegisterDataDTO(CamelModel):
    user: UserDTO


class LoginDataDTO(CamelModel):
    token: str
    user: UserDTO

    @classmethod
    def from_domain(cls, result: LoginResult) -> LoginDataDTO:
        user = result.user
        return cls(
            token=result.token,
            user=UserDTO(id=user.id, email=user.email, role=user.role.value),
        )


class RegisterResponseDTO(Envelope):
    data: RegisterDataDTO


class LoginResponseDTO(Envelope):
    data: LoginDataDTO
