"""Bearer-token authentication and admin authorization dependencies."""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..errors import AuthenticationError, AuthorizationError
from .config import Settings


class Role(str, enum.Enum):
    USER = "user"
    ADMIN = "admin"


@dataclass(slots=True, frozen=True)
class Principal:
    """The caller identified by a bearer token."""

    token: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN


class TokenRegistry:
    """Maps configured bearer tokens to roles."""

    def __init__(self, tokens: dict[str, Role]) -> None:
        self._tokens = dict(tokens)

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenRegistry":
        tokens = {token: Role.USER for token in settings.user_tokens}
        # Admin wins if a token is listed in both.
        tokens.update({token: Role.ADMIN for token in settings.admin_tokens})
        return cls(tokens)

    def validate(self, credentials: Optional[HTTPAuthorizationCredentials]) -> Principal:
        if credentials is None or credentials.scheme.lower() != "bearer" or not credentials.credentials:
            raise AuthenticationError("No token, authorization denied")
        role = self._tokens.get(credentials.credentials)
        if role is None:
            raise AuthenticationError("Token is not valid")
        return Principal(token=credentials.credentials, role=role)


def get_token_registry(request: Request) -> TokenRegistry:
    return request.app.state.token_registry


bearer_scheme = HTTPBearer(auto_error=False)


def require_auth(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    registry: TokenRegistry = Depends(get_token_registry),
) -> Principal:
    """Allow any caller holding a known token."""

    return registry.validate(credentials)


def require_admin(principal: Principal = Depends(require_auth)) -> Principal:
    """Allow only callers holding an admin token."""

    if not principal.is_admin:
        raise AuthorizationError("Access denied. Admin privileges required.")
    return principal
