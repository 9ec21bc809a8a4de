"""
Blog Routes.

Published listing, single-blog reads and author-only writes.

Summary
-------
Endpoints include:
  - List published blogs
  - Get blog by id (counts a view when published)
  - Create blog
  - Update blog
  - Delete blog

Visibility
----------
Drafts are only visible to their author; anyone else gets the same 404 as
for a missing blog and no view is counted. Updates and deletes are
restricted to the author regardless of state.
"""

from logging import getLogger
from typing import Annotated, Any

from fastapi import APIRouter, Body, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from pydantic import ValidationError as PydanticValidationError

from inkwell.configs import file_logger
from inkwell.dependencies import CurrentUserDep, OptionalUserDep, PageQueryDep, StorageDep
from inkwell.errors import ForbiddenError, NotFoundError
from inkwell.managers import limiter
from inkwell.schemas import (
    BlogCreate,
    BlogDetailResponse,
    BlogResponse,
    BlogUpdate,
    MessageResponse,
    PublishedBlogsResponse,
)

router = APIRouter(prefix="/api/blogs", tags=["📝 Blogs"])

logger = file_logger(getLogger(__name__))

NOT_FOUND_RESPONSE = {
    "description": "Blog not found",
    "content": {"application/json": {"example": {"message": "Blog not found"}}},
}
UNAUTHORIZED_RESPONSE = {
    "description": "Missing or invalid credential",
    "content": {"application/json": {"example": {"message": "Authentication required"}}},
}
INVALID_DATA_RESPONSE = {
    "description": "Invalid payload",
    "content": {
        "application/json": {
            "example": {
                "message": "Invalid data",
                "errors": [{"field": "title", "message": "Field required", "type": "missing"}],
            },
        },
    },
}


@router.get(
    "",
    response_class=ORJSONResponse,
    response_model=PublishedBlogsResponse,
    summary="List published blogs",
    description="Published blogs with their authors, newest first.",
    operation_id="blogs_list_published",
)
@limiter.limit("60/minute")
async def list_published_blogs(
    request: Request,
    storage: StorageDep,
    page: PageQueryDep,
) -> PublishedBlogsResponse:
    blogs = await storage.get_published_blogs(limit=page.limit, offset=page.offset)
    return PublishedBlogsResponse(blogs=blogs)


@router.get(
    "/{blog_id}",
    response_class=ORJSONResponse,
    response_model=BlogDetailResponse,
    summary="Get blog by ID",
    description="Fetch a blog with its author. Reading a published blog counts one view.",
    responses={404: NOT_FOUND_RESPONSE},
    operation_id="blogs_get",
)
@limiter.limit("120/minute")
async def get_blog(
    request: Request,
    blog_id: str,
    storage: StorageDep,
    user: OptionalUserDep,
) -> BlogDetailResponse:
    """
    Fetch a single blog.

    Parameters
    ----------
    request : Request
        Incoming request (rate limiting).
    blog_id : str
        Blog identifier.
    storage : BlogStorage
        Storage backend.
    user : User | None
        Caller, when a credential was supplied.

    Returns
    -------
    BlogDetailResponse
        The blog and its author.

    Raises
    ------
    NotFoundError
        When the blog is missing, or is a draft and the caller is not its author.
    """
    blog = await storage.get_blog_with_author(blog_id)
    if blog is None:
        mssg = "Blog not found"
        raise NotFoundError(mssg)

    if not blog.is_published:
        if user is None or user.id != blog.author_id:
            mssg = "Blog not found"
            raise NotFoundError(mssg)
        return BlogDetailResponse(blog=blog)

    await storage.increment_blog_views(blog_id)
    return BlogDetailResponse(blog=blog.model_copy(update={"views": blog.views + 1}))


@router.post(
    "",
    response_class=ORJSONResponse,
    response_model=BlogResponse,
    summary="Create a blog",
    description="Create a blog owned by the caller. Any authorId in the body is ignored.",
    responses={400: INVALID_DATA_RESPONSE, 401: UNAUTHORIZED_RESPONSE},
    operation_id="blogs_create",
)
@limiter.limit("30/minute")
async def create_blog(
    request: Request,
    payload: BlogCreate,
    storage: StorageDep,
    user: CurrentUserDep,
) -> BlogResponse:
    blog = await storage.create_blog(user.id, payload)
    logger.info(f"Blog {blog.id} created by {user.id}")
    return BlogResponse(blog=blog)


@router.put(
    "/{blog_id}",
    response_class=ORJSONResponse,
    response_model=BlogResponse,
    summary="Update a blog",
    description=(
        "Apply a partial update. Only the author may update; "
        "this is also how a blog is published or unpublished."
    ),
    responses={
        400: INVALID_DATA_RESPONSE,
        401: UNAUTHORIZED_RESPONSE,
        403: {
            "description": "Not the author",
            "content": {"application/json": {"example": {"message": "Access denied"}}},
        },
        404: NOT_FOUND_RESPONSE,
    },
    operation_id="blogs_update",
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {
                "application/json": {"schema": BlogUpdate.model_json_schema(by_alias=True)},
            },
        },
    },
)
@limiter.limit("120/minute")
async def update_blog(
    request: Request,
    blog_id: str,
    body: Annotated[dict[str, Any], Body()],
    storage: StorageDep,
    user: CurrentUserDep,
) -> BlogResponse:
    existing = await storage.get_blog(blog_id)
    if existing is None:
        mssg = "Blog not found"
        raise NotFoundError(mssg)
    if existing.author_id != user.id:
        raise ForbiddenError

    # Parsed only after the existence and ownership checks
    try:
        payload = BlogUpdate.model_validate(body)
    except PydanticValidationError as e:
        errors = [{**err, "loc": ("body", *err["loc"])} for err in e.errors(include_url=False)]
        raise RequestValidationError(errors) from e

    blog = await storage.update_blog(blog_id, payload)
    if blog is None:
        mssg = "Blog not found"
        raise NotFoundError(mssg)

    logger.info(f"Blog {blog_id} updated by {user.id}")
    return BlogResponse(blog=blog)


@router.delete(
    "/{blog_id}",
    response_class=ORJSONResponse,
    response_model=MessageResponse,
    summary="Delete a blog",
    responses={
        401: UNAUTHORIZED_RESPONSE,
        404: {
            "description": "Missing, or not owned by the caller",
            "content": {
                "application/json": {"example": {"message": "Blog not found or access denied"}},
            },
        },
    },
    operation_id="blogs_delete",
)
@limiter.limit("30/minute")
async def delete_blog(
    request: Request,
    blog_id: str,
    storage: StorageDep,
    user: CurrentUserDep,
) -> MessageResponse:
    # Ownership and existence are checked together
    if not await storage.delete_blog(blog_id, user.id):
        mssg = "Blog not found or access denied"
        raise NotFoundError(mssg)

    logger.info(f"Blog {blog_id} deleted by {user.id}")
    return MessageResponse(message="Blog deleted successfully")
