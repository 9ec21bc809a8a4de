from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR

from inkwell.errors.base import BaseAppError


class DatabaseError(BaseAppError):
    """Base exception for storage backend failures."""

    def __init__(
        self,
        message: str = "Database Error",
        status_code: int = HTTP_500_INTERNAL_SERVER_ERROR,
    ) -> None:
        super().__init__(message, status_code)


class DatabaseConnectionError(DatabaseError):
    """Exception raised when the storage backend cannot be reached."""

    def __init__(
        self,
        message: str = "Failed to connect to the database",
    ) -> None:
        super().__init__(message, HTTP_500_INTERNAL_SERVER_ERROR)


class DatabaseInitializationError(DatabaseError):
    """Exception raised when schema initialization fails."""

    def __init__(
        self,
        message: str = "Failed to initialize database",
    ) -> None:
        super().__init__(message, HTTP_500_INTERNAL_SERVER_ERROR)
