"""Startup configuration errors."""

from inkwell.errors.base import BaseAppError


class ConfigurationError(BaseAppError):
    """Raised when the startup configuration is incomplete or inconsistent."""

    def __init__(self, message: str = "Invalid configuration") -> None:
        super().__init__(message)
