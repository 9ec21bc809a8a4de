from inkwell.errors.api import (
    ConflictError,
    ForbiddenError,
    GoneError,
    InternalError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from inkwell.errors.base import BaseAppError
from inkwell.errors.config import ConfigurationError
from inkwell.errors.database import (
    DatabaseConnectionError,
    DatabaseError,
    DatabaseInitializationError,
)

__all__ = [
    "BaseAppError",
    "ConfigurationError",
    "ConflictError",
    "DatabaseConnectionError",
    "DatabaseError",
    "DatabaseInitializationError",
    "ForbiddenError",
    "GoneError",
    "InternalError",
    "NotFoundError",
    "UnauthorizedError",
    "ValidationError",
]
