"""Error types raised by the properties API."""
from __future__ import annotations

from typing import Any

from fastapi import status


class ApiError(Exception):
    """Error rendered to the caller as ``{"message": ..., "error": ...}``."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, *, error: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.error = error

    def to_body(self) -> dict[str, Any]:
        body: dict[str, Any] = {"message": self.message}
        if self.error is not None:
            body["error"] = self.error
        return body


class ValidationError(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST


class AuthenticationError(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED


class AuthorizationError(ApiError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(ApiError):
    status_code = status.HTTP_404_NOT_FOUND


class PersistenceError(ApiError):
    """A database call failed; ``error`` carries the driver's message."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class DatabaseConnectionError(RuntimeError):
    """The database could not be reached at startup."""
