# tests/conftest.py
"""Root pytest configuration and shared fixtures."""

import os

# Must happen before inkwell is imported anywhere
os.environ["ENVIRONMENT"] = "development"
os.environ["STORAGE_BACKEND"] = "memory"
os.environ["AUTH_PROVIDER"] = "firebase"
os.environ["FIREBASE_PROJECT_ID"] = "test-project"
os.environ["LOG_TO_FILE"] = "false"
os.environ["LEGACY_REGISTRATION"] = "false"
os.environ["LIMITER_ENABLED"] = "false"

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from inkwell.configs import Settings, settings
from inkwell.context import AppContext
from inkwell.main import create_app
from inkwell.repositories import MemoryStorage
from inkwell.schemas import Identity


class FakeVerifier:
    """Identity verifier that accepts a fixed set of tokens."""

    def __init__(self) -> None:
        self.identities: dict[str, Identity] = {}
        self.calls: list[str] = []
        self.closed = False

    def register(
        self,
        token: str,
        uid: str,
        email: str | None,
        name: str | None = None,
    ) -> dict[str, str]:
        self.identities[token] = Identity(uid=uid, email=email, name=name)
        return {"Authorization": f"Bearer {token}"}

    async def verify(self, token: str) -> Identity | None:
        self.calls.append(token)
        return self.identities.get(token)

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def test_settings() -> Settings:
    return settings


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def verifier() -> FakeVerifier:
    return FakeVerifier()


@pytest.fixture
def context(test_settings: Settings, storage: MemoryStorage, verifier: FakeVerifier) -> AppContext:
    return AppContext(settings=test_settings, storage=storage, verifier=verifier)


@pytest.fixture
async def client(context: AppContext) -> AsyncGenerator[AsyncClient]:
    """HTTP client bound to an app running on the in-memory context."""
    app = create_app(context.settings, context=context)
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def alice_headers(verifier: FakeVerifier) -> dict[str, str]:
    return verifier.register("alice-token", "alice-uid", "alice@example.com", "Alice")


@pytest.fixture
def bob_headers(verifier: FakeVerifier) -> dict[str, str]:
    return verifier.register("bob-token", "bob-uid", "bob@example.com", "Bob")
