"""Translate application errors into JSON responses."""

from collections.abc import Awaitable, Callable
from logging import Logger, getLogger
from typing import cast

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_400_BAD_REQUEST, HTTP_500_INTERNAL_SERVER_ERROR

from inkwell.configs import DEFAULT_ERROR_MESSAGE, INVALID_DATA_MESSAGE, file_logger
from inkwell.errors.base import BaseAppError
from inkwell.utils.helpers import host

logger = file_logger(getLogger(__name__))

_RESERVED_ATTRIBUTES = frozenset({"status_code", "message", "headers"})


def create_exception_handler(
    logger: Logger,
) -> Callable[[Request, Exception], Awaitable[ORJSONResponse]]:
    """
    Create a standardized exception handler for the application.

    Args:
        logger: Logger instance to use for logging exceptions.

    Returns:
        A callable exception handler.
    """

    async def handler(request: Request, exc: Exception) -> ORJSONResponse:
        status_code = getattr(exc, "status_code", HTTP_500_INTERNAL_SERVER_ERROR)
        message = getattr(exc, "message", DEFAULT_ERROR_MESSAGE)
        headers = getattr(exc, "headers", None)

        if status_code >= HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error(
                f"{message} for ip: {host(request)} for endpoint {request.url.path}",
                exc_info=exc,
            )
            return ORJSONResponse(
                content={"message": DEFAULT_ERROR_MESSAGE},
                status_code=status_code,
            )

        logger.warning(f"{message} for ip: {host(request)} for endpoint {request.url.path}")

        content = {"message": message}
        content.update(
            {k: v for k, v in exc.__dict__.items() if k not in _RESERVED_ATTRIBUTES},
        )

        return ORJSONResponse(content=content, status_code=status_code, headers=headers)

    return handler


app_exception_handler = create_exception_handler(logger)


async def validation_exception_handler(
    request: Request,
    exc: Exception,
) -> ORJSONResponse:
    """
    Handle request validation errors with a field-level error list.

    Args:
        request: The incoming request.
        exc: The RequestValidationError exception.

    Returns:
        ORJSONResponse: 400 with ``message`` and ``errors``.
    """
    exec_error = cast(RequestValidationError, exc)

    formatted_errors = []
    for error in exec_error.errors():
        loc = error.get("loc", [])
        # Drop the "body"/"query"/"path" prefix
        field_path = loc[1:] if len(loc) > 1 else loc
        formatted_errors.append(
            {
                "field": ".".join(str(part) for part in field_path),
                "message": error.get("msg", "Invalid value"),
                "type": error.get("type", "validation_error"),
            },
        )

    logger.warning(
        f"Validation error for ip: {host(request)} "
        f"at endpoint {request.url.path}: {formatted_errors}",
    )

    return ORJSONResponse(
        status_code=HTTP_400_BAD_REQUEST,
        content={
            "message": INVALID_DATA_MESSAGE,
            "errors": formatted_errors,
        },
    )


async def unhandled_exception_handler(
    request: Request,
    exc: Exception,
) -> ORJSONResponse:
    """Log an unexpected failure and answer with a redacted 500."""
    logger.error(
        f"Unhandled {type(exc).__name__} for ip: {host(request)} at endpoint {request.url.path}",
        exc_info=exc,
    )
    return ORJSONResponse(
        status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": DEFAULT_ERROR_MESSAGE},
    )


EXCEPTION_HANDLERS: list[tuple[type[Exception], Callable[..., Awaitable[ORJSONResponse]]]] = [
    (BaseAppError, app_exception_handler),
    (RequestValidationError, validation_exception_handler),
    (Exception, unhandled_exception_handler),
]
