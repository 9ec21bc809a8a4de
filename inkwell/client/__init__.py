"""Client-side data hooks: API client and editor autosave."""

from inkwell.client.api import ApiClientError, BlogApiClient
from inkwell.client.autosave import AutoSaver

__all__ = ["ApiClientError", "AutoSaver", "BlogApiClient"]
