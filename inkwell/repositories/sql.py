"""Relational storage backend (Postgres/Supabase via SQLAlchemy async)."""

from logging import getLogger
from typing import Self
from uuid import uuid4

from sqlalchemy import delete, desc, select, text, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlmodel import col

from inkwell.configs import DEFAULT_PAGE_SIZE, Settings, file_logger
from inkwell.db.database import (
    SessionMaker,
    close_db,
    create_engine,
    create_session_maker,
    init_db,
    transaction,
)
from inkwell.errors import ConfigurationError, ConflictError, NotFoundError
from inkwell.models import BlogDB, UserDB
from inkwell.schemas import Blog, BlogCreate, BlogUpdate, BlogWithAuthor, User, UserCreate
from inkwell.utils.helpers import as_utc, normalize_email, utc_now

logger = file_logger(getLogger(__name__))


def to_user(row: UserDB) -> User:
    return User(id=row.id, email=row.email, name=row.name, created_at=as_utc(row.created_at))


def to_blog(row: BlogDB) -> Blog:
    data = row.model_dump()
    data["created_at"] = as_utc(row.created_at)
    data["updated_at"] = as_utc(row.updated_at)
    return Blog.model_validate(data)


def to_blog_with_author(blog: BlogDB, author: UserDB) -> BlogWithAuthor:
    return BlogWithAuthor(**to_blog(blog).model_dump(), author=to_user(author))


class SQLStorage:
    """
    Storage backed by a relational database.

    Each public method runs in its own transaction. View increments are a
    single ``UPDATE ... SET views = views + 1`` statement and ownership is
    checked inside the ``DELETE`` itself, so neither needs a prior read.
    """

    def __init__(self, engine: AsyncEngine, session_maker: SessionMaker | None = None) -> None:
        self._engine = engine
        self._session_maker = session_maker or create_session_maker(engine)

    @classmethod
    def from_settings(cls, config: Settings) -> Self:
        """Build the storage from ``DATABASE_URL`` and the pool settings."""
        if not config.DATABASE_URL:
            mssg = "DATABASE_URL is required for the postgres storage backend"
            raise ConfigurationError(mssg)
        return cls(create_engine(config.DATABASE_URL, config))

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    async def initialize(self) -> None:
        """Create missing tables (development and tests; production uses Alembic)."""
        await init_db(self._engine)

    async def get_user(self, user_id: str) -> User | None:
        async with transaction(self._session_maker) as session:
            row = await session.get(UserDB, user_id)
            return to_user(row) if row else None

    async def get_user_by_email(self, email: str) -> User | None:
        query = select(UserDB).where(col(UserDB.email) == normalize_email(email))
        async with transaction(self._session_maker) as session:
            result = await session.execute(query)
            row = result.scalar_one_or_none()
            return to_user(row) if row else None

    async def create_user(self, data: UserCreate) -> User:
        row = UserDB(
            id=data.id or str(uuid4()),
            email=data.email,
            name=data.name,
            created_at=utc_now(),
        )
        try:
            async with transaction(self._session_maker) as session:
                session.add(row)
        except IntegrityError as e:
            mssg = "Email already registered"
            raise ConflictError(mssg) from e

        logger.info(f"User created: {row.id}")
        return to_user(row)

    async def get_blog(self, blog_id: str) -> Blog | None:
        async with transaction(self._session_maker) as session:
            row = await session.get(BlogDB, blog_id)
            return to_blog(row) if row else None

    async def get_blog_with_author(self, blog_id: str) -> BlogWithAuthor | None:
        query = (
            select(BlogDB, UserDB)
            .join(UserDB, col(BlogDB.author_id) == col(UserDB.id))
            .where(col(BlogDB.id) == blog_id)
        )
        async with transaction(self._session_maker) as session:
            result = await session.execute(query)
            row = result.first()
            return to_blog_with_author(row[0], row[1]) if row else None

    async def get_blogs_by_author(self, author_id: str) -> list[Blog]:
        query = (
            select(BlogDB)
            .where(col(BlogDB.author_id) == author_id)
            .order_by(desc(col(BlogDB.updated_at)))
        )
        async with transaction(self._session_maker) as session:
            result = await session.execute(query)
            return [to_blog(row) for row in result.scalars().all()]

    async def get_published_blogs(
        self,
        limit: int = DEFAULT_PAGE_SIZE,
        offset: int = 0,
    ) -> list[BlogWithAuthor]:
        # Inner join drops blogs whose author is gone before the window applies
        query = (
            select(BlogDB, UserDB)
            .join(UserDB, col(BlogDB.author_id) == col(UserDB.id))
            .where(col(BlogDB.is_published).is_(True))
            .order_by(desc(col(BlogDB.created_at)))
            .offset(offset)
            .limit(limit)
        )
        async with transaction(self._session_maker) as session:
            result = await session.execute(query)
            return [to_blog_with_author(blog, author) for blog, author in result.all()]

    async def create_blog(self, author_id: str, data: BlogCreate) -> Blog:
        now = utc_now()
        async with transaction(self._session_maker) as session:
            if await session.get(UserDB, author_id) is None:
                mssg = "Author not found"
                raise NotFoundError(mssg)

            row = BlogDB(
                id=str(uuid4()),
                author_id=author_id,
                views=0,
                created_at=now,
                updated_at=now,
                **data.model_dump(),
            )
            session.add(row)

        return to_blog(row)

    async def update_blog(self, blog_id: str, data: BlogUpdate) -> Blog | None:
        async with transaction(self._session_maker) as session:
            row = await session.get(BlogDB, blog_id)
            if row is None:
                return None

            for key, value in data.changes().items():
                setattr(row, key, value)
            row.updated_at = max(utc_now(), as_utc(row.updated_at))
            session.add(row)

        return to_blog(row)

    async def delete_blog(self, blog_id: str, requesting_author_id: str) -> bool:
        statement = delete(BlogDB).where(
            col(BlogDB.id) == blog_id,
            col(BlogDB.author_id) == requesting_author_id,
        )
        async with transaction(self._session_maker) as session:
            result = await session.execute(statement)
            return result.rowcount > 0

    async def increment_blog_views(self, blog_id: str) -> None:
        statement = (
            update(BlogDB)
            .where(col(BlogDB.id) == blog_id)
            .values(views=col(BlogDB.views) + 1)
        )
        async with transaction(self._session_maker) as session:
            await session.execute(statement)

    async def ping(self) -> bool:
        try:
            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError):
            logger.warning("Database ping failed", exc_info=True)
            return False
        return True

    async def close(self) -> None:
        await close_db(self._engine)
