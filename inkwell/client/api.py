"""Async HTTP client for the Inkwell API."""

from collections.abc import Awaitable, Callable
from logging import getLogger
from types import TracebackType
from typing import Any, Self

from httpx import AsyncClient, Response, Timeout
from pydantic import BaseModel

from inkwell.configs import DEFAULT_PAGE_SIZE, file_logger
from inkwell.schemas import Blog, BlogCreate, BlogUpdate, BlogWithAuthor, User

logger = file_logger(getLogger(__name__))

TokenProvider = Callable[[], Awaitable[str | None]]


class ApiClientError(Exception):
    """Non-2xx API response."""

    def __init__(
        self,
        status_code: int,
        message: str,
        errors: list[dict[str, Any]] | None = None,
    ) -> None:
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message
        self.errors = errors or []


def _payload(data: BaseModel | dict[str, Any]) -> dict[str, Any]:
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json", by_alias=True, exclude_unset=True)
    return data


class BlogApiClient:
    """
    Client for the blog endpoints.

    Args:
        base_url: API root, e.g. ``https://api.example.com``.
        token_provider: Coroutine returning the current ID token, or ``None``
            when signed out. Called before every request so refreshed tokens
            are picked up.
        http_client: Optional pre-built ``httpx.AsyncClient`` (tests).
        timeout: Request timeout in seconds.
    """

    def __init__(
        self,
        base_url: str,
        token_provider: TokenProvider | None = None,
        http_client: AsyncClient | None = None,
        timeout: float = 10.0,
    ) -> None:
        self._token_provider = token_provider
        self._owns_client = http_client is None
        self._client = http_client or AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=Timeout(timeout),
        )

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _headers(self) -> dict[str, str]:
        if self._token_provider is None:
            return {}
        token = await self._token_provider()
        return {"Authorization": f"Bearer {token}"} if token else {}

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        response = await self._client.request(
            method,
            path,
            json=json,
            params=params,
            headers=await self._headers(),
        )
        if response.is_success:
            return response.json()
        raise self._error(response)

    @staticmethod
    def _error(response: Response) -> ApiClientError:
        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        message = body.get("message") or response.reason_phrase or "Request failed"
        request = response.request
        logger.warning(f"API {request.method} {request.url.path} -> {response.status_code}")
        return ApiClientError(response.status_code, message, body.get("errors"))

    async def list_published(
        self,
        limit: int = DEFAULT_PAGE_SIZE,
        offset: int = 0,
    ) -> list[BlogWithAuthor]:
        data = await self._request("GET", "/api/blogs", params={"limit": limit, "offset": offset})
        return [BlogWithAuthor.model_validate(b) for b in data["blogs"]]

    async def get_blog(self, blog_id: str) -> BlogWithAuthor:
        data = await self._request("GET", f"/api/blogs/{blog_id}")
        return BlogWithAuthor.model_validate(data["blog"])

    async def my_blogs(self, user_id: str) -> list[Blog]:
        data = await self._request("GET", f"/api/user/{user_id}/blogs")
        return [Blog.model_validate(b) for b in data["blogs"]]

    async def create_blog(self, blog: BlogCreate | dict[str, Any]) -> Blog:
        data = await self._request("POST", "/api/blogs", json=_payload(blog))
        return Blog.model_validate(data["blog"])

    async def update_blog(self, blog_id: str, changes: BlogUpdate | dict[str, Any]) -> Blog:
        data = await self._request("PUT", f"/api/blogs/{blog_id}", json=_payload(changes))
        return Blog.model_validate(data["blog"])

    async def delete_blog(self, blog_id: str) -> str:
        data = await self._request("DELETE", f"/api/blogs/{blog_id}")
        return data["message"]

    async def me(self) -> User:
        data = await self._request("GET", "/api/auth/me")
        return User.model_validate(data["user"])
