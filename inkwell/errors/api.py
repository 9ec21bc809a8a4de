"""Errors raised by the auth resolver and the route layer."""

from typing import Any

from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_403_FORBIDDEN,
    HTTP_404_NOT_FOUND,
    HTTP_409_CONFLICT,
    HTTP_410_GONE,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from inkwell.errors.base import BaseAppError


class ValidationError(BaseAppError):
    """Malformed or missing fields, with field-level detail."""

    def __init__(
        self,
        message: str = "Invalid data",
        errors: list[dict[str, Any]] | None = None,
    ) -> None:
        super().__init__(message, HTTP_400_BAD_REQUEST)
        self.errors = errors or []


class UnauthorizedError(BaseAppError):
    """Missing or invalid credential."""

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message, HTTP_401_UNAUTHORIZED)
        self.headers = {"WWW-Authenticate": "Bearer"}


class ForbiddenError(BaseAppError):
    """Valid identity acting on a resource it does not own."""

    def __init__(self, message: str = "Access denied") -> None:
        super().__init__(message, HTTP_403_FORBIDDEN)


class NotFoundError(BaseAppError):
    """Referenced resource does not exist."""

    def __init__(self, message: str = "Not found") -> None:
        super().__init__(message, HTTP_404_NOT_FOUND)


class ConflictError(BaseAppError):
    """Uniqueness violation, e.g. a duplicate e-mail."""

    def __init__(self, message: str = "A record with this value already exists") -> None:
        super().__init__(message, HTTP_409_CONFLICT)


class GoneError(BaseAppError):
    """Endpoint retired."""

    def __init__(self, message: str = "This endpoint is no longer available") -> None:
        super().__init__(message, HTTP_410_GONE)


class InternalError(BaseAppError):
    """Failure the caller cannot fix; the message is never exposed."""

    def __init__(self, message: str = "Internal server error") -> None:
        super().__init__(message, HTTP_500_INTERNAL_SERVER_ERROR)
