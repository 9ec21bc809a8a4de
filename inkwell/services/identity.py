"""
Identity verifiers.

A verifier turns an opaque bearer credential into identity claims. Token
issuance stays with the provider; verification failures are logged and
reported as ``None`` so callers only decide between "verified" and "not".
"""

from logging import getLogger
from typing import Any, Protocol, runtime_checkable

from firebase_admin import App, auth
from firebase_admin.exceptions import FirebaseError
from httpx import AsyncClient, HTTPError, Timeout
from starlette.concurrency import run_in_threadpool
from starlette.status import HTTP_200_OK

from inkwell.configs import Settings, file_logger
from inkwell.errors import ConfigurationError
from inkwell.schemas import Identity
from inkwell.services.firebase import get_firebase_app

logger = file_logger(getLogger(__name__))


@runtime_checkable
class IdentityVerifier(Protocol):
    """Protocol for identity provider clients."""

    async def verify(self, token: str) -> Identity | None:
        """Return the claims for ``token``, or ``None`` when it does not verify."""
        ...

    async def close(self) -> None:
        """Release provider connections."""
        ...


class FirebaseIdentityVerifier:
    """Verify Firebase ID tokens with the Admin SDK."""

    def __init__(self, app: App, *, check_revoked: bool = False) -> None:
        self._app = app
        self._check_revoked = check_revoked

    @classmethod
    def from_settings(cls, config: Settings) -> "FirebaseIdentityVerifier":
        return cls(get_firebase_app(config))

    async def verify(self, token: str) -> Identity | None:
        try:
            # verify_id_token may fetch signing certificates over the network
            claims: dict[str, Any] = await run_in_threadpool(
                auth.verify_id_token,
                token,
                app=self._app,
                check_revoked=self._check_revoked,
            )
        except (ValueError, FirebaseError) as e:
            logger.warning(f"Firebase token rejected: {type(e).__name__}")
            return None

        return Identity(uid=claims["uid"], email=claims.get("email"), name=claims.get("name"))

    async def close(self) -> None:
        pass


class SupabaseIdentityVerifier:
    """
    Verify Supabase access tokens against the GoTrue ``/auth/v1/user`` endpoint.

    Args:
        url: Supabase project URL.
        service_key: Service-role key sent as the ``apikey`` header.
        timeout: Request timeout in seconds.
        client: Optional pre-built HTTP client (tests).
    """

    def __init__(
        self,
        url: str,
        service_key: str,
        timeout: float = 10.0,
        client: AsyncClient | None = None,
    ) -> None:
        self._endpoint = f"{url.rstrip('/')}/auth/v1/user"
        self._service_key = service_key
        self._client = client or AsyncClient(timeout=Timeout(timeout))

    @classmethod
    def from_settings(cls, config: Settings) -> "SupabaseIdentityVerifier":
        if not config.SUPABASE_URL or not config.SUPABASE_SERVICE_KEY:
            mssg = "SUPABASE_URL and SUPABASE_SERVICE_KEY are required"
            raise ConfigurationError(mssg)
        return cls(
            config.SUPABASE_URL,
            config.SUPABASE_SERVICE_KEY.get_secret_value(),
            timeout=config.SUPABASE_TIMEOUT,
        )

    async def verify(self, token: str) -> Identity | None:
        headers = {"apikey": self._service_key, "Authorization": f"Bearer {token}"}
        try:
            response = await self._client.get(self._endpoint, headers=headers)
        except HTTPError as e:
            logger.warning(f"Supabase verification request failed: {type(e).__name__}")
            return None

        if response.status_code != HTTP_200_OK:
            logger.warning(f"Supabase token rejected with status {response.status_code}")
            return None

        data: dict[str, Any] = response.json()
        if not data.get("id"):
            return None

        metadata = data.get("user_metadata") or {}
        return Identity(
            uid=data["id"],
            email=data.get("email"),
            name=metadata.get("full_name") or metadata.get("name"),
        )

    async def close(self) -> None:
        await self._client.aclose()


def create_verifier(config: Settings) -> IdentityVerifier | None:
    """
    Build the verifier selected by ``AUTH_PROVIDER``.

    Returns ``None`` in ``header`` mode, where requests assert a user ID
    directly and no provider is consulted.
    """
    if config.AUTH_PROVIDER == "firebase":
        return FirebaseIdentityVerifier.from_settings(config)
    if config.AUTH_PROVIDER == "supabase":
        return SupabaseIdentityVerifier.from_settings(config)
    return None
