"""Inkwell Backend - blogging API with pluggable storage and identity providers."""

from fastapi import FastAPI
from fastapi.middleware.gzip import GZipMiddleware
from slowapi.errors import RateLimitExceeded
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from inkwell.configs import Settings, settings
from inkwell.context import AppContext
from inkwell.errors.handlers import EXCEPTION_HANDLERS
from inkwell.managers import limiter, rate_limit_exceeded_handler
from inkwell.middleware import (
    LoggingMiddleware,
    SecurityHeadersMiddleware,
    configure_cors,
    lifespan,
)
from inkwell.routes import auth_router, blog_router, health_router, user_router


def create_app(config: Settings | None = None, context: AppContext | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        config: Settings to run with; the module-level settings by default.
        context: Pre-built application context. When omitted the lifespan
            builds one from ``config`` and releases it on shutdown.

    Returns:
        FastAPI: The configured application.
    """
    config = config or settings

    app = FastAPI(
        title=config.APP_NAME,
        description="Inkwell blogging API",
        version=config.VERSION,
        debug=config.DEBUG,
        lifespan=lifespan,
        swagger_ui_parameters={"docExpansion": "none", "operationsSorter": "method"},
    )
    app.state.settings = config
    app.state.context = context
    app.state.limiter = limiter

    configure_cors(app, config)

    app.add_middleware(LoggingMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(ProxyHeadersMiddleware, trusted_hosts="*")

    routes = [health_router, auth_router, user_router, blog_router]
    _ = [app.include_router(router) for router in routes]

    errors = [(RateLimitExceeded, rate_limit_exceeded_handler), *EXCEPTION_HANDLERS]
    _ = [app.add_exception_handler(exc_type, handler) for exc_type, handler in errors]

    return app


app = create_app()
