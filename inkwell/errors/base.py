"""Base application error."""

from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR


class BaseAppError(Exception):
    """Base exception class for application errors."""

    def __init__(
        self,
        message: str = "Internal server error",
        status_code: int = HTTP_500_INTERNAL_SERVER_ERROR,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __str__(self) -> str:
        return self.message
