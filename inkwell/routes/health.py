"""Health check route."""

from fastapi import APIRouter, Request
from fastapi.responses import ORJSONResponse

from inkwell.dependencies import ContextDep
from inkwell.managers import limiter
from inkwell.schemas import HealthResponse
from inkwell.utils.helpers import utc_now

router = APIRouter(tags=["🩺 Health"])


@router.get(
    "/health",
    response_class=ORJSONResponse,
    response_model=HealthResponse,
    summary="Health check endpoint",
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "status": "ok",
                        "timestamp": "2025-01-01T00:00:00Z",
                        "version": "1.0.0",
                        "storage": "ok",
                    },
                },
            },
        },
    },
    operation_id="health_check",
)
@limiter.exempt
async def health_check(request: Request, context: ContextDep) -> HealthResponse:
    """
    Report liveness and storage reachability.

    Always answers 200 while the process is serving; ``status`` turns
    ``degraded`` when the storage backend does not respond.
    """
    storage_ok = await context.storage.ping()
    return HealthResponse(
        status="ok" if storage_ok else "degraded",
        timestamp=utc_now(),
        version=context.settings.VERSION,
        storage="ok" if storage_ok else "unavailable",
    )
