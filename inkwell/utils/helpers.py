from collections.abc import MutableMapping
from datetime import UTC, datetime
from typing import Any

from bs4 import BeautifulSoup
from bs4.exceptions import ParserRejectedMarkup
from fastapi import FastAPI, Request
from fastapi.routing import APIRoute
from pydantic import validate_email
from starlette.routing import BaseRoute, Match, Route

from inkwell.configs import DISPLAY_NAME_MAX_LENGTH, EXCERPT_LENGTH


def host(request: Request) -> str:
    """Return the host IP address."""
    return request.client.host if request.client else "unknown"


def utc_now() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(tz=UTC)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes read back from drivers that drop the zone."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def today_str() -> str:
    """Return the current UTC time as an ISO-8601 string."""
    return utc_now().isoformat(timespec="seconds")


def get_summary(request: Request) -> str | None:
    """Extract route summary from request."""

    scope: MutableMapping[str, Any] = request.scope
    app: FastAPI = scope["app"]
    routes: list[BaseRoute] = app.routes

    summary = None
    for route in routes:
        is_api_route = type(route) is APIRoute
        is_route = type(route) is Route
        if is_api_route and route.matches(scope)[0] == Match.FULL:
            summary = route.summary
            break
        if is_route and route.matches(scope)[0] == Match.FULL:
            summary = route.name
            break

    return summary


def html_to_text(content: str) -> str:
    """
    Convert rich-text HTML to plain text.

    Uses BeautifulSoup to extract the text nodes, which copes with the
    nested inline markup a content-editable editor produces.
    """
    if not content:
        return ""

    try:
        soup = BeautifulSoup(content, "html.parser")
        text = soup.get_text(" ")
    except ParserRejectedMarkup:
        text = content

    return " ".join(text.split())


def make_excerpt(content: str, length: int = EXCERPT_LENGTH) -> str:
    """
    Build the default excerpt for a blog body.

    Args:
        content: Rich-text HTML body.
        length: Maximum number of plain-text characters kept.

    Returns:
        str: Leading plain text, with ``...`` appended when truncated.
    """
    text = html_to_text(content)
    if len(text) <= length:
        return text
    return f"{text[:length]}..."


def derive_display_name(name: str | None, email: str | None) -> str:
    """
    Pick a display name for an auto-provisioned user.

    Falls back to the e-mail local part when the identity provider
    supplied no usable name. The result is cut to the stored column width.
    """
    if name and name.strip():
        candidate = name.strip()
    elif email and (local := email.split("@", 1)[0].strip()):
        candidate = local
    else:
        return "User"
    return candidate[:DISPLAY_NAME_MAX_LENGTH].rstrip()


def normalize_email(email: str) -> str:
    """
    Return ``email`` in the form stored for users.

    Matches the normalisation ``EmailStr`` applies on input (lower-cased
    domain, Unicode NFC), so lookups by the address a user registered with
    find the stored record. Unparseable input is returned unchanged.
    """
    try:
        return validate_email(email)[1]
    except ValueError:
        return email
