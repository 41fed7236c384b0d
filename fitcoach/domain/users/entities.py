# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class Role(str, Enum):
    TRAINER = "TRAINER"
    CLIENT = "CLIENT"

    @classmethod
    def parse(cls, value: str | Role) -> Role | None:
        try:
            return cls(value)
        except ValueError:
            return None


@dataclass(slots=True, frozen=True)
class User:

    id: str
    email: str
    password_hash: str
    role: Role
    created_at: datetime

    def public(self) -> PublicUser:
        return PublicUser(id=self.id, email=self.email, role=self.role, created_at=self.created_at)


@dataclass(slots=True, frozen=True)
class PublicUser:
    """User as exposed to callers; never carries the password hash."""

    id: str
    email: str
    role: Role
    created_at: datetime | None = None


@dataclass(slots=True, frozen=True)
class TokenIdentity:

    user_id: str
    email: str
    role: Role


@dataclass(slots=True, frozen=True)
class LoginResult:

    token: str
    user: PublicUser
