"""Tests specific to the relational backend (run on SQLite)."""

from pathlib import Path

import pytest
from sqlalchemy import delete, event
from sqlmodel import col

from inkwell.configs import settings
from inkwell.db import create_engine
from inkwell.errors import ConfigurationError
from inkwell.models import UserDB
from inkwell.repositories.sql import SQLStorage
from inkwell.schemas import BlogCreate, UserCreate


class TestSQLStorage:
    """Tests for SQLStorage."""

    @pytest.mark.asyncio
    async def test_increment_is_a_single_update(self, sql_storage: SQLStorage) -> None:
        """Test that the counter is bumped in SQL without reading it first."""
        user = await sql_storage.create_user(UserCreate(email="a@x.com", name="A"))
        blog = await sql_storage.create_blog(user.id, BlogCreate(title="T", content="C"))

        statements: list[str] = []

        def record(conn: object, cursor: object, statement: str, *args: object) -> None:
            statements.append(statement.strip().upper())

        event.listen(sql_storage.engine.sync_engine, "before_cursor_execute", record)
        try:
            await sql_storage.increment_blog_views(blog.id)
        finally:
            event.remove(sql_storage.engine.sync_engine, "before_cursor_execute", record)

        updates = [s for s in statements if s.startswith("UPDATE")]
        assert len(updates) == 1
        assert "VIEWS + " in updates[0]
        assert not [s for s in statements if s.startswith("SELECT")]

    @pytest.mark.asyncio
    async def test_orphaned_blogs_are_skipped(self, sql_storage: SQLStorage) -> None:
        """Test that blogs without an author are left out of joined reads."""
        user = await sql_storage.create_user(UserCreate(email="a@x.com", name="A"))
        blog = await sql_storage.create_blog(
            user.id,
            BlogCreate(title="T", content="C", isPublished=True),
        )

        # SQLite does not enforce the cascade without PRAGMA foreign_keys
        async with sql_storage.engine.begin() as conn:
            await conn.execute(delete(UserDB).where(col(UserDB.id) == user.id))

        assert await sql_storage.get_blog_with_author(blog.id) is None
        assert await sql_storage.get_published_blogs() == []
        assert await sql_storage.get_blog(blog.id) is not None

    @pytest.mark.asyncio
    async def test_returned_datetimes_are_utc(self, sql_storage: SQLStorage) -> None:
        """Test that returned timestamps are timezone aware UTC."""
        user = await sql_storage.create_user(UserCreate(email="a@x.com", name="A"))
        blog = await sql_storage.create_blog(user.id, BlogCreate(title="T", content="C"))

        stored = await sql_storage.get_blog(blog.id)
        fetched_user = await sql_storage.get_user(user.id)

        assert stored is not None
        assert fetched_user is not None
        assert stored.created_at.utcoffset() is not None
        assert fetched_user.created_at.utcoffset() is not None

    @pytest.mark.asyncio
    async def test_ping_reports_unreachable_database(self, tmp_path: Path) -> None:
        """Test that ping is False for an unreachable database."""
        engine = create_engine(f"sqlite+aiosqlite:///{tmp_path}/missing/dir/db.sqlite", settings)
        storage = SQLStorage(engine)

        assert await storage.ping() is False
        await storage.close()

    def test_from_settings_requires_url(self) -> None:
        """Test that a missing DATABASE_URL is a configuration error."""
        with pytest.raises(ConfigurationError):
            SQLStorage.from_settings(settings.model_copy(update={"DATABASE_URL": None}))
