"""
Auth Routes.

Users are provisioned from verified identity tokens, so the only routes
here are the caller's profile and the retired registration endpoint,
which answers ``410 Gone`` unless ``LEGACY_REGISTRATION`` is enabled.
"""

from logging import getLogger

from fastapi import APIRouter, Depends, Request
from fastapi.responses import ORJSONResponse

from inkwell.configs import file_logger
from inkwell.dependencies import (
    USER_ID_HEADER,
    CurrentUserDep,
    StorageDep,
    require_legacy_registration,
)
from inkwell.errors import ConflictError
from inkwell.managers import limiter
from inkwell.schemas import UserCreate, UserResponse

router = APIRouter(prefix="/api/auth", tags=["🔑 Auth"])

logger = file_logger(getLogger(__name__))


@router.post(
    "/register",
    response_class=ORJSONResponse,
    response_model=UserResponse,
    summary="Register a user (legacy)",
    description=(
        "Create a user, or return the existing one with the same email. "
        "An x-user-id header, when present, becomes the user ID."
    ),
    responses={
        410: {
            "description": "Legacy registration disabled",
            "content": {
                "application/json": {
                    "example": {"message": "Registration is handled by the identity provider"},
                },
            },
        },
    },
    dependencies=[Depends(require_legacy_registration)],
    operation_id="auth_register",
    deprecated=True,
)
@limiter.limit("10/minute")
async def register(request: Request, payload: UserCreate, storage: StorageDep) -> UserResponse:
    existing = await storage.get_user_by_email(payload.email)
    if existing is not None:
        return UserResponse(user=existing)

    if header_id := request.headers.get(USER_ID_HEADER):
        payload = payload.model_copy(update={"id": header_id})

    try:
        user = await storage.create_user(payload)
    except ConflictError:
        # Lost a race with a concurrent registration for the same email
        existing = await storage.get_user_by_email(payload.email)
        if existing is None:
            raise
        return UserResponse(user=existing)

    logger.info(f"User registered: {user.id}")
    return UserResponse(user=user)


@router.get(
    "/me",
    response_class=ORJSONResponse,
    response_model=UserResponse,
    summary="Get the current user",
    description="Resolve the caller's credential, provisioning the user on first contact.",
    operation_id="auth_me",
)
@limiter.limit("60/minute")
async def me(request: Request, user: CurrentUserDep) -> UserResponse:
    return UserResponse(user=user)
