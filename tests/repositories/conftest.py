"""Storage fixtures: every contract test runs against each local backend."""

from collections.abc import AsyncGenerator

import pytest
from sqlalchemy.pool import StaticPool

from inkwell.configs import settings
from inkwell.db import create_engine
from inkwell.repositories import BlogStorage, MemoryStorage
from inkwell.repositories.sql import SQLStorage
from inkwell.schemas import User, UserCreate


async def make_sql_storage() -> SQLStorage:
    engine = create_engine(
        "sqlite+aiosqlite://",
        settings,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    storage = SQLStorage(engine)
    await storage.initialize()
    return storage


@pytest.fixture
async def sql_storage() -> AsyncGenerator[SQLStorage]:
    storage = await make_sql_storage()
    yield storage
    await storage.close()


@pytest.fixture(params=["memory", "sql"])
async def backend(request: pytest.FixtureRequest) -> AsyncGenerator[BlogStorage]:
    if request.param == "memory":
        yield MemoryStorage()
        return

    storage = await make_sql_storage()
    yield storage
    await storage.close()


@pytest.fixture
async def author(backend: BlogStorage) -> User:
    return await backend.create_user(UserCreate(email="a@x.com", name="A"))


@pytest.fixture
async def other_author(backend: BlogStorage) -> User:
    return await backend.create_user(UserCreate(email="c@x.com", name="C"))
