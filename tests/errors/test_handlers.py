"""Tests for the exception handlers."""

from collections.abc import AsyncGenerator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from pydantic import BaseModel, Field

from inkwell.errors import (
    ConflictError,
    InternalError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from inkwell.errors.handlers import EXCEPTION_HANDLERS


class Payload(BaseModel):
    title: str = Field(min_length=1)


def build_app() -> FastAPI:
    app = FastAPI()

    @app.get("/missing")
    async def missing() -> None:
        mssg = "Blog not found"
        raise NotFoundError(mssg)

    @app.get("/conflict")
    async def conflict() -> None:
        raise ConflictError

    @app.get("/unauthorized")
    async def unauthorized() -> None:
        raise UnauthorizedError

    @app.get("/invalid")
    async def invalid() -> None:
        raise ValidationError(errors=[{"field": "title", "message": "too long"}])

    @app.get("/internal")
    async def internal() -> None:
        mssg = "connection string postgres://secret leaked"
        raise InternalError(mssg)

    @app.get("/crash")
    async def crash() -> None:
        mssg = "boom"
        raise RuntimeError(mssg)

    @app.post("/payload")
    async def payload(body: Payload) -> Payload:
        return body

    for exc_type, handler in EXCEPTION_HANDLERS:
        app.add_exception_handler(exc_type, handler)
    return app


@pytest.fixture
async def error_client() -> AsyncGenerator[AsyncClient]:
    transport = ASGITransport(app=build_app(), raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


class TestAppErrorHandler:
    """Tests for BaseAppError translation."""

    @pytest.mark.asyncio
    async def test_not_found(self, error_client: AsyncClient) -> None:
        """Test that NotFoundError becomes a 404 with its message."""
        response = await error_client.get("/missing")

        assert response.status_code == 404
        assert response.json() == {"message": "Blog not found"}

    @pytest.mark.asyncio
    async def test_conflict(self, error_client: AsyncClient) -> None:
        """Test that ConflictError becomes a 409."""
        response = await error_client.get("/conflict")

        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_unauthorized_sets_challenge(self, error_client: AsyncClient) -> None:
        """Test that 401 responses carry a Bearer challenge."""
        response = await error_client.get("/unauthorized")

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"
        assert response.json() == {"message": "Authentication required"}

    @pytest.mark.asyncio
    async def test_validation_errors_listed(self, error_client: AsyncClient) -> None:
        """Test that application validation errors list their fields."""
        response = await error_client.get("/invalid")

        assert response.status_code == 400
        assert response.json() == {
            "message": "Invalid data",
            "errors": [{"field": "title", "message": "too long"}],
        }

    @pytest.mark.asyncio
    async def test_internal_message_redacted(self, error_client: AsyncClient) -> None:
        """Test that internal error details are not returned."""
        response = await error_client.get("/internal")

        assert response.status_code == 500
        assert response.json() == {"message": "Internal server error"}


class TestRequestValidation:
    """Tests for request body validation failures."""

    @pytest.mark.asyncio
    async def test_missing_field(self, error_client: AsyncClient) -> None:
        """Test that a missing body field is a 400 naming the field."""
        response = await error_client.post("/payload", json={})

        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Invalid data"
        assert body["errors"][0]["field"] == "title"
        assert body["errors"][0]["type"] == "missing"

    @pytest.mark.asyncio
    async def test_malformed_json(self, error_client: AsyncClient) -> None:
        """Test that a malformed JSON body is a 400."""
        response = await error_client.post(
            "/payload",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400


class TestUnhandled:
    """Tests for unexpected exceptions."""

    @pytest.mark.asyncio
    async def test_crash_is_redacted(self, error_client: AsyncClient) -> None:
        """Test that an unexpected exception becomes a generic 500."""
        response = await error_client.get("/crash")

        assert response.status_code == 500
        assert response.json() == {"message": "Internal server error"}
