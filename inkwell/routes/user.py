"""User Routes: public profile lookup and the author's own blog list."""

from fastapi import APIRouter, Request
from fastapi.responses import ORJSONResponse

from inkwell.dependencies import CurrentUserDep, StorageDep
from inkwell.errors import ForbiddenError, NotFoundError
from inkwell.managers import limiter
from inkwell.schemas import BlogListResponse, UserResponse

router = APIRouter(prefix="/api/user", tags=["👤 Users"])


@router.get(
    "/{user_id}",
    response_class=ORJSONResponse,
    response_model=UserResponse,
    summary="Get user by ID",
    responses={
        404: {
            "description": "User not found",
            "content": {"application/json": {"example": {"message": "User not found"}}},
        },
    },
    operation_id="users_get",
)
@limiter.limit("60/minute")
async def get_user(request: Request, user_id: str, storage: StorageDep) -> UserResponse:
    user = await storage.get_user(user_id)
    if user is None:
        mssg = "User not found"
        raise NotFoundError(mssg)
    return UserResponse(user=user)


@router.get(
    "/{user_id}/blogs",
    response_class=ORJSONResponse,
    response_model=BlogListResponse,
    summary="List the caller's blogs",
    description="Every blog of the caller, drafts included, most recently updated first.",
    responses={
        403: {
            "description": "Listing another user's blogs",
            "content": {"application/json": {"example": {"message": "Access denied"}}},
        },
    },
    operation_id="users_blogs",
)
@limiter.limit("60/minute")
async def get_user_blogs(
    request: Request,
    user_id: str,
    storage: StorageDep,
    user: CurrentUserDep,
) -> BlogListResponse:
    if user.id != user_id:
        raise ForbiddenError
    return BlogListResponse(blogs=await storage.get_blogs_by_author(user_id))
