"""
Database initialization and verification script.

Builds the configured storage backend, creating missing tables for the
relational backend, and checks that it answers.

Note:
    Production schemas are managed by Alembic migrations.
    Run 'uv run alembic upgrade head' to apply migrations.
"""

from asyncio import run as asyncio_run
from logging import getLogger

from inkwell.configs import file_logger, settings
from inkwell.context import build_context
from inkwell.errors import DatabaseConnectionError

logger = file_logger(getLogger(__name__))


async def main() -> None:
    """Verify storage connectivity."""
    logger.info(f"Verifying {settings.STORAGE_BACKEND} storage...")
    context = await build_context(settings)
    try:
        if not await context.storage.ping():
            raise DatabaseConnectionError
        logger.info("Storage ready!")
    finally:
        await context.close()


def run() -> None:
    asyncio_run(main())


if __name__ == "__main__":
    run()
