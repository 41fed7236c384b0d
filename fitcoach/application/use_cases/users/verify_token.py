"""Use-case for resolving a bearer token into the caller's identity."""

from __future__ import annotations

from fitcoach.domain.users.entities import TokenIdentity
from fitcoach.domain.users.exceptions import InvalidTokenError
from fitcoach.domain.users.repositories import TokenCodec


class VerifyTokenUseCase:
    def __init__(self, *, tokens: TokenCodec) -> None:
        self._tokens = tokens

    def execute(self, token: str | None) -> TokenIdentity:
        if not token:
            raise InvalidTokenError("No token provided", code="unauthorized")
        return self._tokens.verify(token)
