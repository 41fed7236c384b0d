# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Stateless signed bearer tokens."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import jwt

from fitcoach.domain.users.entities import Role, TokenIdentity
from fitcoach.domain.users.exceptions import InvalidTokenError, TokenExpiredError
from fitcoach.domain.users.repositories import TokenCodec
from fitcoach.shared.logging import logger

_ALGORITHM = "HS256"
_REQUIRED_CLAIMS = ("userId", "email", "role", "iat", "exp")


def _utcnow() -> datetime:
    return datetime.now(UTC)


class JwtTokenCodec(TokenCodec):
    def __init__(
        self,
        *,
        secret: str,
        ttl: timedelta,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if not secret:
            raise ValueError("Token signing secret must not be empty")
        self._secret = secret
        self._ttl = ttl
        self._clock = clock

    def issue(self, identity: TokenIdentity) -> str:
        issued_at = self._clock()
        claims = {
            "userId": identity.user_id,
            "email": identity.email,
            "role": identity.role.value,
            "iat": issued_at,
            "exp": issued_at + self._ttl,
        }
        return jwt.encode(claims, self._secret, algorithm=_ALGORITHM)

    def verify(self, token: str) -> TokenIdentity:
        """Check signature and claims; expiry is judged against the codec's clock."""
        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[_ALGORITHM],
                options={
                    "require": list(_REQUIRED_CLAIMS),
                    "verify_exp": False,
                    "verify_iat": False,
                },
            )
        except jwt.InvalidTokenError as exc:
            logger.info(f"auth.token: invalid ({type(exc).__name__})")
            raise InvalidTokenError(cause=exc) from exc

        expires_at = claims["exp"]
        if not isinstance(expires_at, int | float) or isinstance(expires_at, bool):
            logger.info("auth.token: invalid exp claim")
            raise InvalidTokenError()
        if expires_at <= self._clock().timestamp():
            logger.info("auth.token: expired")
            raise TokenExpiredError()

        role = Role.parse(claims["role"])
        user_id = claims["userId"]
        email = claims["email"]
        if role is None or not isinstance(user_id, str) or not isinstance(email, str):
            logger.info("auth.token: invalid claims")
            raise InvalidTokenError()
        return TokenIdentity(user_id=user_id, email=email, role=role)
