"""Database engine and session management for the relational backend."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from logging import getLogger
from typing import Any

from sqlalchemy import event
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlmodel import SQLModel

from inkwell.configs import Settings, file_logger
from inkwell.errors import DatabaseError, DatabaseInitializationError

logger = file_logger(getLogger(__name__))

STATEMENT_TIMEOUT_MS = 30000

SessionMaker = async_sessionmaker[AsyncSession]


def _configure_engine_events(engine: AsyncEngine) -> None:
    """Configure connection pool events for monitoring."""

    @event.listens_for(engine.sync_engine, "connect")
    def on_connect(dbapi_connection: object, connection_record: object) -> None:
        logger.debug("New database connection established")

    @event.listens_for(engine.sync_engine, "checkout")
    def on_checkout(
        dbapi_connection: object,
        connection_record: object,
        connection_proxy: object,
    ) -> None:
        logger.debug("Connection checked out from pool")


def create_engine(url: str, config: Settings, **overrides: Any) -> AsyncEngine:
    """
    Build the async engine for ``url``.

    Pool sizing only applies to server databases; asyncpg additionally gets
    statement and lock timeouts.

    Args:
        url: SQLAlchemy async URL, e.g. ``postgresql+asyncpg://...``.
        config: Application settings.
        **overrides: Extra keyword arguments for ``create_async_engine``.

    Returns:
        AsyncEngine: The configured engine.
    """
    options: dict[str, Any] = {"echo": config.DATABASE_ECHO, "pool_pre_ping": True}

    if not url.startswith("sqlite"):
        options |= {
            "pool_size": config.POOL_SIZE,
            "max_overflow": config.MAX_OVERFLOW,
            "pool_timeout": config.POOL_TIMEOUT,
            "pool_recycle": config.POOL_RECYCLE,
        }
    if "+asyncpg" in url:
        options["connect_args"] = {
            "command_timeout": STATEMENT_TIMEOUT_MS / 1000,
            "server_settings": {
                "statement_timeout": str(STATEMENT_TIMEOUT_MS),
                "lock_timeout": str(STATEMENT_TIMEOUT_MS),
            },
        }

    options |= overrides
    engine = create_async_engine(url, **options)

    if config.DEBUG:
        _configure_engine_events(engine)

    return engine


def create_session_maker(engine: AsyncEngine) -> SessionMaker:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )


@asynccontextmanager
async def transaction(session_maker: SessionMaker) -> AsyncGenerator[AsyncSession]:
    """
    Open a session and run one transaction in it.

    Commits on successful exit and rolls back on exception. Integrity
    errors propagate unchanged so callers can map them to conflicts;
    other SQLAlchemy failures are wrapped in ``DatabaseError``.

    Example:
        ```python
        async with transaction(session_maker) as session:
            session.add(UserDB(email="a@x.com", name="A"))
        ```
    """
    async with session_maker() as session:
        try:
            yield session
            await session.commit()
        except IntegrityError:
            await session.rollback()
            raise
        except SQLAlchemyError as e:
            await session.rollback()
            logger.exception("Transaction error")
            raise DatabaseError from e
        except Exception:
            await session.rollback()
            raise


async def init_db(engine: AsyncEngine) -> None:
    """
    Create all tables defined in the SQLModel models.

    Note:
        This is a simple initialization for development and tests.
        For production, use the Alembic migrations.
    """
    # Import models so they are registered on the metadata
    from inkwell.models import BlogDB, UserDB  # noqa: F401, PLC0415

    try:
        async with engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)
    except SQLAlchemyError as e:
        logger.exception("Failed to create tables")
        raise DatabaseInitializationError from e
    logger.info("Database initialized successfully!")


async def close_db(engine: AsyncEngine) -> None:
    """Dispose the engine's connection pool."""
    await engine.dispose()
    logger.info("Database connections closed")
