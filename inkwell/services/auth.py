"""Resolve request credentials to users, provisioning them on first contact."""

from logging import getLogger

from inkwell.configs import file_logger
from inkwell.errors import BaseAppError, InternalError, UnauthorizedError
from inkwell.repositories import BlogStorage
from inkwell.schemas import User, UserCreate
from inkwell.services.identity import IdentityVerifier
from inkwell.utils.helpers import derive_display_name

logger = file_logger(getLogger(__name__))


class AuthResolver:
    """
    Map an inbound credential to a stored ``User``.

    Bearer tokens go through the configured identity verifier; an unknown
    but verified identity is provisioned with its provider-issued ID. The
    legacy ``x-user-id`` mode only looks users up and never creates them.
    """

    def __init__(self, storage: BlogStorage, verifier: IdentityVerifier | None) -> None:
        self.storage = storage
        self.verifier = verifier

    async def resolve_bearer(self, token: str | None) -> User:
        """
        Resolve a bearer token to a user.

        Args:
            token: Raw bearer credential (without the ``Bearer`` prefix).

        Returns:
            User: Existing or newly provisioned user.

        Raises:
            UnauthorizedError: Missing, unverifiable or e-mail-less identity.
            InternalError: Provisioning failed.
        """
        if not token or not token.strip():
            raise UnauthorizedError
        if self.verifier is None:
            mssg = "Bearer authentication is not configured"
            raise UnauthorizedError(mssg)

        identity = await self.verifier.verify(token.strip())
        if identity is None:
            mssg = "Invalid or expired token"
            raise UnauthorizedError(mssg)
        if not identity.email:
            mssg = "Identity has no email address"
            raise UnauthorizedError(mssg)

        user = await self.storage.get_user(identity.uid)
        if user is not None:
            return user

        return await self.provision(identity.uid, identity.email, identity.name)

    async def resolve_user_header(self, user_id: str | None) -> User:
        """Resolve a directly asserted ``x-user-id`` header (legacy mode)."""
        if not user_id or not user_id.strip():
            raise UnauthorizedError

        user = await self.storage.get_user(user_id.strip())
        if user is None:
            mssg = "User not found"
            raise UnauthorizedError(mssg)
        return user

    async def provision(self, uid: str, email: str, name: str | None) -> User:
        """Create the user record for a first-time identity."""
        try:
            payload = UserCreate(id=uid, email=email, name=derive_display_name(name, email))
            user = await self.storage.create_user(payload)
        except (BaseAppError, ValueError) as e:
            logger.exception(f"Auto-provisioning failed for user {uid}")
            mssg = "Failed to provision user"
            raise InternalError(mssg) from e

        logger.info(f"Auto-provisioned user {user.id}")
        return user
