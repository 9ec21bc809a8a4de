"""Rate limiter configuration using slowapi."""

from hashlib import sha256
from logging import getLogger
from typing import cast

from fastapi import Request
from fastapi.responses import ORJSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.status import HTTP_429_TOO_MANY_REQUESTS

from inkwell.configs import LimiterConfig, file_logger
from inkwell.utils.helpers import host

logger = file_logger(getLogger(__name__))


def get_identifier(request: Request) -> str:
    """
    Get unique identifier for rate limiting.

    Authenticated callers are keyed by a digest of their credential,
    anonymous ones by IP address.

    Args:
        request: FastAPI request object.

    Returns:
        Unique identifier string.
    """
    authorization = request.headers.get("Authorization")
    if authorization:
        return f"token:{sha256(authorization.encode('utf-8')).hexdigest()[:32]}"

    user_id = request.headers.get("x-user-id")
    if user_id:
        return f"user:{user_id}"

    return f"ip:{get_remote_address(request)}"


limiter = Limiter(**LimiterConfig().model_dump(), key_func=get_identifier)


async def rate_limit_exceeded_handler(
    request: Request,
    exc: Exception,
) -> ORJSONResponse:
    """
    Handle rate limit exceeded exceptions.

    Args:
        request: FastAPI request object.
        exc: RateLimitExceeded exception.

    Returns:
        429 response in the application's ``{message}`` error shape.
    """
    http_exc = cast(RateLimitExceeded, exc)
    logger.warning(f"Rate limit exceeded for ip: {host(request)} at endpoint {request.url.path}")
    return ORJSONResponse(
        status_code=HTTP_429_TOO_MANY_REQUESTS,
        content={
            "message": "Rate limit exceeded",
            "allowed_requests": http_exc.detail,
        },
    )
