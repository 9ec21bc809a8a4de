"""Storage backends and backend selection."""

from inkwell.configs import Settings
from inkwell.repositories.base import BlogStorage
from inkwell.repositories.memory import MemoryStorage


def create_storage(config: Settings) -> BlogStorage:
    """
    Build the storage backend selected by ``STORAGE_BACKEND``.

    Backend modules are imported lazily so a deployment only needs the
    driver of the backend it runs.
    """
    if config.STORAGE_BACKEND == "postgres":
        from inkwell.repositories.sql import SQLStorage  # noqa: PLC0415

        return SQLStorage.from_settings(config)

    if config.STORAGE_BACKEND == "firestore":
        from inkwell.repositories.firestore import FirestoreStorage  # noqa: PLC0415

        return FirestoreStorage.from_settings(config)

    return MemoryStorage()


__all__ = ["BlogStorage", "MemoryStorage", "create_storage"]
