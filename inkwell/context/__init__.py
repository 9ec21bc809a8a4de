"""
Process-wide application context.

The context is built once at startup (or handed to ``create_app`` by
tests) and stored on ``app.state.context``; request handlers reach it
through the dependencies in ``inkwell.dependencies``.
"""

from dataclasses import dataclass, field
from logging import getLogger

from inkwell.configs import Settings, file_logger
from inkwell.repositories import BlogStorage, create_storage
from inkwell.services.auth import AuthResolver
from inkwell.services.firebase import release_firebase_app
from inkwell.services.identity import IdentityVerifier, create_verifier

logger = file_logger(getLogger(__name__))


@dataclass
class AppContext:
    """Settings plus the storage backend and identity verifier built from them."""

    settings: Settings
    storage: BlogStorage
    verifier: IdentityVerifier | None = None
    auth: AuthResolver = field(init=False)

    def __post_init__(self) -> None:
        self.auth = AuthResolver(self.storage, self.verifier)

    async def close(self) -> None:
        """Release storage and provider connections."""
        await self.storage.close()
        if self.verifier is not None:
            await self.verifier.close()
        uses_firebase = self.settings.AUTH_PROVIDER == "firebase"
        if uses_firebase or self.settings.STORAGE_BACKEND == "firestore":
            release_firebase_app()


async def build_context(config: Settings) -> AppContext:
    """
    Construct the storage backend and identity verifier for ``config``.

    Relational storage gets its tables created when they are missing;
    production schemas are managed by Alembic, where this is a no-op.
    """
    storage = create_storage(config)

    initialize = getattr(storage, "initialize", None)
    if initialize is not None:
        await initialize()

    verifier = create_verifier(config)
    logger.info(
        f"Context ready: storage={config.STORAGE_BACKEND}, auth={config.AUTH_PROVIDER}",
    )
    return AppContext(settings=config, storage=storage, verifier=verifier)


__all__ = ["AppContext", "build_context"]
