# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import Any, cast

from flask import g, request

from fitcoach.application.use_cases.users.verify_token import VerifyTokenUseCase
from fitcoach.domain.users.entities import Role, TokenIdentity
from fitcoach.shared.errors import AuthenticationRequiredError, RoleForbiddenError
from fitcoach.shared.logging import logger


def _bearer_token() -> str | None:
    auth = request.headers.get("Authorization", "")
    if not auth.startswith("Bearer "):
        return None
    return auth[7:].strip() or None


def current_identity() -> TokenIdentity:
    """Return the identity verified for the current request."""
    identity = g.get("identity")
    if identity is None:
        raise AuthenticationRequiredError("Authentication required")
    return cast(TokenIdentity, identity)


class RoleGate:
    """Bearer-token authentication plus role enforcement for Flask views."""

    def __init__(self, *, verify_token: VerifyTokenUseCase) -> None:
        self._verify_token = verify_token

    def authenticate(self) -> TokenIdentity:
        token = _bearer_token()
        if not token:
            logger.warning(
                f"No bearer token on {request.method} {request.path} "
                f"from {request.headers.get('X-Forwarded-For', request.remote_addr)}"
            )
            raise AuthenticationRequiredError()

        identity = self._verify_token.execute(token)
        g.identity = identity
        g.user_id = identity.user_id
        g.user_email = identity.email
        g.user_role = identity.role.value
        logger.debug(f"Auth OK: user={identity.user_id} {request.method} {request.path}")
        return identity

    def require(self, *roles: Role) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        allowed = tuple(roles)

        def decorator(f: Callable[..., Any]) -> Callable[..., Any]:
            @wraps(f)
            def inner(*a, **kw):
                identity = self.authenticate()
                if allowed and identity.role not in allowed:
                    logger.warning(
                        f"Role {identity.role.value} denied on {request.method} {request.path}"
                    )
                    raise RoleForbiddenError(
                        "Access denied. Required role: "
                        + " or ".join(role.value for role in allowed)
                    )
                return f(*a, **kw)

            return inner

        return decorator


__all__ = ["RoleGate", "current_identity"]
