from inkwell.monitoring.logging import (
    bind_request_id,
    clear_context,
    configure_logging,
    get_logger,
    get_request_id,
)

__all__ = [
    "bind_request_id",
    "clear_context",
    "configure_logging",
    "get_logger",
    "get_request_id",
]
