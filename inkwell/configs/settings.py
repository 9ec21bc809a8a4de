"""Application settings and configuration constants.

This module contains the validated startup configuration for the Inkwell
backend. The storage backend and the identity provider are selected here
once; incomplete combinations fail at construction time instead of
degrading to a development stand-in.
"""

from logging import Logger
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Literal, Self

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from pythonjsonlogger.json import JsonFormatter

from inkwell.errors.config import ConfigurationError

ENV_FILE = Path(__file__).parent.parent.parent / ".env"

# --- Constants ---
EXCERPT_LENGTH = 150
DISPLAY_NAME_MAX_LENGTH = 100
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100
AUTOSAVE_DELAY_SECONDS = 2.0

# Response constants
DEFAULT_ERROR_MESSAGE = "Internal server error"
INVALID_DATA_MESSAGE = "Invalid data"

StorageBackend = Literal["memory", "postgres", "firestore"]
AuthProvider = Literal["firebase", "supabase", "header"]


class Settings(BaseSettings):
    """Application settings with validation and default values."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    APP_NAME: str = "Inkwell Backend"
    VERSION: str = "1.0.0"
    DEBUG: bool = False

    # Environment
    ENVIRONMENT: Literal["development", "staging", "production"] = "development"
    LOG_LEVEL: str = "INFO"
    LOG_TO_FILE: bool = False
    LOG_FILE: str = "logs/inkwell.log"
    CORS_ORIGINS: list[str] = ["http://localhost:5173", "http://localhost:3000"]

    # Storage
    STORAGE_BACKEND: StorageBackend = "memory"
    DATABASE_URL: str | None = None
    DATABASE_ECHO: bool = False
    POOL_SIZE: int = 5
    MAX_OVERFLOW: int = 10
    POOL_TIMEOUT: int = 30  # seconds
    POOL_RECYCLE: int = 1800  # seconds

    # Identity provider
    AUTH_PROVIDER: AuthProvider = "firebase"
    FIREBASE_PROJECT_ID: str | None = None
    FIREBASE_CREDENTIALS_FILE: str | None = None
    SUPABASE_URL: str | None = None
    SUPABASE_SERVICE_KEY: SecretStr | None = None
    SUPABASE_TIMEOUT: float = 10.0  # seconds

    # Legacy registration endpoint (POST /api/auth/register)
    LEGACY_REGISTRATION: bool = False

    @model_validator(mode="after")
    def check_backend_configuration(self) -> Self:
        """Reject incomplete storage/identity combinations."""
        missing: list[str] = []

        if self.STORAGE_BACKEND == "postgres" and not self.DATABASE_URL:
            missing.append("DATABASE_URL (required by STORAGE_BACKEND=postgres)")
        if self.STORAGE_BACKEND == "firestore" and not self.FIREBASE_PROJECT_ID:
            missing.append("FIREBASE_PROJECT_ID (required by STORAGE_BACKEND=firestore)")
        if self.AUTH_PROVIDER == "firebase" and not self.FIREBASE_PROJECT_ID:
            missing.append("FIREBASE_PROJECT_ID (required by AUTH_PROVIDER=firebase)")
        if self.AUTH_PROVIDER == "supabase":
            if not self.SUPABASE_URL:
                missing.append("SUPABASE_URL (required by AUTH_PROVIDER=supabase)")
            if not self.SUPABASE_SERVICE_KEY or not self.SUPABASE_SERVICE_KEY.get_secret_value():
                missing.append("SUPABASE_SERVICE_KEY (required by AUTH_PROVIDER=supabase)")

        if missing:
            mssg = f"Incomplete configuration: {', '.join(missing)}"
            raise ConfigurationError(mssg)

        if self.ENVIRONMENT == "production":
            if self.STORAGE_BACKEND == "memory":
                mssg = "STORAGE_BACKEND=memory is not allowed in production"
                raise ConfigurationError(mssg)
            if self.AUTH_PROVIDER == "header":
                mssg = "AUTH_PROVIDER=header is not allowed in production"
                raise ConfigurationError(mssg)

        return self


class LimiterConfig(BaseSettings):
    """Rate limiter configuration."""

    model_config = SettingsConfigDict(env_prefix="LIMITER_", case_sensitive=False)

    default_limits: list[str] = ["120/minute"]
    enabled: bool = True
    storage_uri: str = "memory://"
    headers_enabled: bool = False


settings = Settings()


def file_logger(logger: Logger) -> Logger:
    """
    Attach the rotating JSON file handler to ``logger`` when file logging is on.

    Args:
        logger: Module logger, usually ``getLogger(__name__)``.

    Returns:
        Logger: The same logger, for one-line module setup.
    """
    if not settings.LOG_TO_FILE:
        return logger
    if any(isinstance(handler, RotatingFileHandler) for handler in logger.handlers):
        return logger

    log_file = Path(settings.LOG_FILE)
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(log_file, maxBytes=5 * 1024 * 1024, backupCount=5)
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)
    return logger
