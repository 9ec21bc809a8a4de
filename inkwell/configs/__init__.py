from inkwell.configs.settings import (
    AUTOSAVE_DELAY_SECONDS,
    DEFAULT_ERROR_MESSAGE,
    DEFAULT_PAGE_SIZE,
    DISPLAY_NAME_MAX_LENGTH,
    EXCERPT_LENGTH,
    INVALID_DATA_MESSAGE,
    MAX_PAGE_SIZE,
    AuthProvider,
    LimiterConfig,
    Settings,
    StorageBackend,
    file_logger,
    settings,
)

__all__ = [
    "AUTOSAVE_DELAY_SECONDS",
    "DEFAULT_ERROR_MESSAGE",
    "DEFAULT_PAGE_SIZE",
    "DISPLAY_NAME_MAX_LENGTH",
    "EXCERPT_LENGTH",
    "INVALID_DATA_MESSAGE",
    "MAX_PAGE_SIZE",
    "AuthProvider",
    "LimiterConfig",
    "Settings",
    "StorageBackend",
    "file_logger",
    "settings",
]
