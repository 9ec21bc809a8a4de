"""
Structured logging with PII sanitization.

This module provides structured logging using structlog with:
- JSON output outside development
- Pretty console output for development
- Automatic redaction of e-mail addresses and bearer tokens
- OpenTelemetry trace context injection
- Request ID correlation

Security
--------
Sensitive fields are automatically redacted from logs:
- Authorization headers
- Cookie values
- API keys
- E-mail addresses (pattern detection)
- JWTs (Firebase ID tokens, Supabase access tokens)

Examples
--------
>>> from inkwell.monitoring import get_logger
>>> logger = get_logger("my_module")
>>> logger.info("Blog published", blog_id="123")
"""

from logging import StreamHandler, root
from re import Pattern
from re import compile as re_compile
from typing import Any

from opentelemetry.trace import get_current_span
from structlog import configure
from structlog import get_logger as struct_logger
from structlog.contextvars import (
    bind_contextvars,
    clear_contextvars,
    get_contextvars,
    merge_contextvars,
)
from structlog.dev import ConsoleRenderer, RichTracebackFormatter
from structlog.processors import (
    JSONRenderer,
    StackInfoRenderer,
    UnicodeDecoder,
    add_log_level,
    format_exc_info,
)
from structlog.stdlib import (
    BoundLogger,
    ExtraAdder,
    LoggerFactory,
    PositionalArgumentsFormatter,
    ProcessorFormatter,
    add_logger_name,
    filter_by_level,
)
from structlog.types import EventDict, Processor, WrappedLogger

from inkwell.configs import Settings, settings
from inkwell.utils.helpers import today_str

# Sensitive headers to redact
SENSITIVE_HEADERS: frozenset[str] = frozenset(
    {
        "authorization",
        "cookie",
        "x-api-key",
        "proxy-authorization",
        "apikey",
    },
)

# Order matters: JWTs contain dots and must be matched before anything else
PII_PATTERNS: list[tuple[Pattern, str]] = [
    (re_compile(r"eyJ[a-zA-Z0-9_-]*\.eyJ[a-zA-Z0-9_-]*\.[a-zA-Z0-9_-]*"), "[REDACTED_JWT]"),
    (re_compile(r"(?i)bearer\s+[a-zA-Z0-9._~+/=-]+"), "Bearer [REDACTED]"),
    (re_compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}"), "[REDACTED_EMAIL]"),
]

# Characters to sanitize to prevent log injection
CONTROL_CHARS = str.maketrans({"\n": "\\n", "\r": "\\r", "\t": "\\t", "\x00": ""})


def sanitize_log_message(message: str) -> str:
    r"""
    Remove control characters and sanitize log messages.

    Examples:
    --------
    >>> sanitize_log_message("Hello\nWorld")
    'Hello\\nWorld'
    """
    return message.translate(CONTROL_CHARS)


def sanitize_headers(headers: dict[str, Any]) -> dict[str, Any]:
    """
    Return headers with sensitive values redacted.

    Examples:
    --------
    >>> sanitize_headers({"Authorization": "Bearer token123", "Content-Type": "json"})
    {'Authorization': '[REDACTED]', 'Content-Type': 'json'}
    """
    return {k: "[REDACTED]" if k.lower() in SENSITIVE_HEADERS else v for k, v in headers.items()}


def redact_pii(message: str) -> str:
    """
    Redact PII patterns from log messages.

    Examples:
    --------
    >>> redact_pii("User user@example.com logged in")
    'User [REDACTED_EMAIL] logged in'
    """
    for pattern, replacement in PII_PATTERNS:
        message = pattern.sub(replacement, message)
    return message


def add_timestamp(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Add ISO format timestamp to log entry."""
    event_dict["timestamp"] = today_str()
    return event_dict


def add_trace_context(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Add OpenTelemetry trace context to log entry when a span is active."""
    context = get_current_span().get_span_context()
    if context.is_valid:
        event_dict["trace_id"] = format(context.trace_id, "032x")
        event_dict["span_id"] = format(context.span_id, "016x")
    return event_dict


def sanitize_event_dict(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Sanitize the event dictionary for PII and injection."""
    for key, value in event_dict.items():
        if isinstance(value, str):
            event_dict[key] = redact_pii(sanitize_log_message(value))
        elif key.lower() == "headers" and isinstance(value, dict):
            event_dict[key] = sanitize_headers(value)

    return event_dict


def get_renderer(config: Settings, *, colors: bool = True) -> Processor:
    """
    Pick the final renderer for the environment.

    Args:
        config: Application settings.
        colors: Whether to enable colors in ConsoleRenderer.

    Returns:
        Processor: Console renderer in development, JSON renderer otherwise.
    """
    if config.ENVIRONMENT == "development":
        return ConsoleRenderer(
            colors=colors,
            pad_level=False,
            exception_formatter=RichTracebackFormatter(),
        )
    return JSONRenderer()


def configure_logging(config: Settings | None = None) -> None:
    """Configure structured logging for the application."""
    config = config or settings

    # Clear any existing root handlers to prevent duplicates on reload
    root.handlers.clear()
    root.setLevel(config.LOG_LEVEL.upper())

    configure(
        processors=[
            filter_by_level,
            merge_contextvars,
            add_logger_name,
            add_log_level,
            PositionalArgumentsFormatter(),
            StackInfoRenderer(),
            format_exc_info,
            UnicodeDecoder(),
            ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=LoggerFactory(),
        wrapper_class=BoundLogger,
        cache_logger_on_first_use=True,
    )

    console_handler = StreamHandler()
    console_handler.setFormatter(
        ProcessorFormatter(
            processors=[
                ProcessorFormatter.remove_processors_meta,
                ExtraAdder(),
                sanitize_event_dict,
                get_renderer(config),
            ],
            foreign_pre_chain=[
                merge_contextvars,
                add_log_level,
                add_timestamp,
                add_trace_context,
            ],
        ),
    )
    root.addHandler(console_handler)


def get_logger(name: str) -> BoundLogger:
    """
    Get a structured logger instance.

    Examples:
    --------
    >>> logger = get_logger("inkwell.routes.blog")
    >>> logger.info("Blog created", blog_id="123")
    """
    return struct_logger(name)


def bind_request_id(request_id: str) -> None:
    """Bind request ID to the current logging context."""
    bind_contextvars(request_id=request_id)


def get_request_id() -> str | None:
    """Return the request ID bound to the current context, if any."""
    return get_contextvars().get("request_id")


def clear_context() -> None:
    """Clear all bound context variables."""
    clear_contextvars()
