"""Request dependencies: application context, authentication and paging."""

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Query, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from inkwell.configs import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from inkwell.context import AppContext
from inkwell.errors import GoneError, InternalError, UnauthorizedError
from inkwell.repositories import BlogStorage
from inkwell.schemas import User

bearer_scheme = HTTPBearer(auto_error=False, description="Identity provider ID token")

USER_ID_HEADER = "x-user-id"


def get_context(request: Request) -> AppContext:
    """Return the context built by the lifespan (or injected by tests)."""
    context: AppContext | None = getattr(request.app.state, "context", None)
    if context is None:
        mssg = "Application context is not initialized"
        raise InternalError(mssg)
    return context


ContextDep = Annotated[AppContext, Depends(get_context)]


def get_storage(context: ContextDep) -> BlogStorage:
    return context.storage


StorageDep = Annotated[BlogStorage, Depends(get_storage)]
CredentialsDep = Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)]


async def get_current_user(
    request: Request,
    context: ContextDep,
    credentials: CredentialsDep,
) -> User:
    """
    Resolve the authenticated caller.

    Parameters
    ----------
    request : Request
        Incoming request; read for the ``x-user-id`` header in header mode.
    context : AppContext
        Application context holding the auth resolver.
    credentials : HTTPAuthorizationCredentials | None
        Parsed ``Authorization: Bearer`` header, if any.

    Returns
    -------
    User
        The caller, provisioned on first contact in bearer mode.

    Raises
    ------
    UnauthorizedError
        When the credential is missing or does not verify.
    """
    if context.settings.AUTH_PROVIDER == "header":
        return await context.auth.resolve_user_header(request.headers.get(USER_ID_HEADER))
    return await context.auth.resolve_bearer(credentials.credentials if credentials else None)


async def get_optional_user(
    request: Request,
    context: ContextDep,
    credentials: CredentialsDep,
) -> User | None:
    """Resolve the caller when a credential is present; anonymous otherwise."""
    if context.settings.AUTH_PROVIDER == "header":
        if not request.headers.get(USER_ID_HEADER):
            return None
    elif credentials is None:
        return None

    try:
        return await get_current_user(request, context, credentials)
    except UnauthorizedError:
        return None


CurrentUserDep = Annotated[User, Depends(get_current_user)]
OptionalUserDep = Annotated[User | None, Depends(get_optional_user)]


@dataclass(frozen=True)
class PageQuery:
    limit: int
    offset: int


def get_page_query(
    limit: Annotated[
        int,
        Query(ge=1, le=MAX_PAGE_SIZE, description="Maximum number of blogs to return"),
    ] = DEFAULT_PAGE_SIZE,
    offset: Annotated[int, Query(ge=0, description="Number of blogs to skip")] = 0,
) -> PageQuery:
    return PageQuery(limit=limit, offset=offset)


PageQueryDep = Annotated[PageQuery, Depends(get_page_query)]


def require_legacy_registration(context: ContextDep) -> None:
    """Reject the retired registration endpoint unless explicitly enabled."""
    if not context.settings.LEGACY_REGISTRATION:
        mssg = "Registration is handled by the identity provider"
        raise GoneError(mssg)
