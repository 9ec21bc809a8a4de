"""
Middleware components for the Inkwell backend.

This module contains middleware for security headers, request logging
and CORS handling, plus the lifespan handler that builds and releases
the application context.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from time import perf_counter
from uuid import uuid4

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from inkwell.configs import Settings
from inkwell.context import build_context
from inkwell.monitoring.logging import (
    bind_request_id,
    clear_context,
    configure_logging,
    get_logger,
)
from inkwell.utils.helpers import get_summary, host

logger = get_logger("inkwell.middleware")

REQUEST_ID_HEADER = "X-Request-ID"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """Manage application startup and shutdown, owning the context it builds."""
    config: Settings = app.state.settings
    configure_logging(config)

    # Startup
    logger.info(f"Starting {app.title}...")

    owns_context = getattr(app.state, "context", None) is None
    try:
        if owns_context:
            app.state.context = await build_context(config)
        logger.info(
            "Services initialized successfully",
            storage=config.STORAGE_BACKEND,
            auth=config.AUTH_PROVIDER,
            environment=config.ENVIRONMENT,
        )
    except Exception:
        logger.exception("Failed to initialize services")
        raise

    yield

    # Shutdown
    logger.info(f"Shutting down {app.title}...")

    if owns_context:
        try:
            await app.state.context.close()
            logger.info("Services cleaned up successfully")
        except Exception:
            logger.exception("Error during service cleanup")
        finally:
            app.state.context = None


def configure_cors(app: FastAPI, config: Settings) -> None:
    """Configure CORS middleware for the application."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )


class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Bind a request ID, then log request summary and timing information."""

        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
        clear_context()
        bind_request_id(request_id)

        start_time = perf_counter()
        summary = get_summary(request)

        route_info = summary or f"{request.method} {request.url.path}"
        logger.info(f"Request: {route_info}, from ip: {host(request)}")

        try:
            response = await call_next(request)
            duration = perf_counter() - start_time

            logger.info(
                f"Response: {response.status_code} for {request.method} {request.url.path} "
                f"in {duration:.2f}s",
            )
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            clear_context()


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Add security headers to all responses."""

        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        if request.url.scheme == "https":
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response
