from inkwell.utils.helpers import (
    as_utc,
    derive_display_name,
    get_summary,
    host,
    html_to_text,
    make_excerpt,
    normalize_email,
    today_str,
    utc_now,
)

__all__ = [
    "as_utc",
    "derive_display_name",
    "get_summary",
    "host",
    "html_to_text",
    "make_excerpt",
    "normalize_email",
    "today_str",
    "utc_now",
]
