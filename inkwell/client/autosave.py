"""
Debounced autosave for the blog editor.

Each edit reschedules a single timer; when the editor has been quiet for
``delay`` seconds the latest title and content are pushed, provided they
differ from what was last saved successfully.
"""

from asyncio import CancelledError, Task, create_task, sleep, wait
from collections.abc import Awaitable, Callable
from contextlib import suppress
from datetime import datetime
from logging import getLogger
from typing import Any, Self

from httpx import HTTPError

from inkwell.client.api import ApiClientError, BlogApiClient
from inkwell.configs import AUTOSAVE_DELAY_SECONDS, file_logger
from inkwell.utils.helpers import make_excerpt, utc_now

logger = file_logger(getLogger(__name__))

SaveCallback = Callable[[dict[str, str]], Awaitable[Any]]


class AutoSaver:
    """
    Debounce editor changes into occasional saves.

    Args:
        save: Coroutine receiving ``{"title", "content", "excerpt"}``.
        delay: Quiet period in seconds before a save fires.
        enabled: When ``False`` scheduling is a no-op.
    """

    def __init__(
        self,
        save: SaveCallback,
        delay: float = AUTOSAVE_DELAY_SECONDS,
        *,
        enabled: bool = True,
    ) -> None:
        self._save = save
        self.delay = delay
        self.enabled = enabled
        self._pending: tuple[str, str] | None = None
        self._last_saved: tuple[str, str] = ("", "")
        self._timer: Task[None] | None = None
        self._in_flight: Task[bool] | None = None
        self.last_saved_at: datetime | None = None

    @classmethod
    def for_blog(
        cls,
        client: BlogApiClient,
        blog_id: str,
        delay: float = AUTOSAVE_DELAY_SECONDS,
        *,
        enabled: bool = True,
    ) -> Self:
        """Autosave into an existing blog through the API client."""

        async def save(payload: dict[str, str]) -> None:
            await client.update_blog(blog_id, payload)

        return cls(save, delay, enabled=enabled)

    @property
    def pending(self) -> bool:
        """Whether a save is scheduled and has not fired yet."""
        return self._timer is not None and not self._timer.done()

    @property
    def last_saved(self) -> tuple[str, str]:
        return self._last_saved

    def mark_saved(self, title: str, content: str) -> None:
        """Record an externally saved state (e.g. a manual save) as the baseline."""
        self._last_saved = (title, content)

    def schedule(self, title: str, content: str) -> None:
        """Record an edit and restart the quiet-period timer."""
        if not self.enabled:
            return

        self._pending = (title, content)
        self._cancel_timer()
        self._timer = create_task(self._fire_after_delay())

    async def flush(self) -> bool:
        """Save the latest edit immediately. Returns whether a save happened."""
        self._cancel_timer()
        return await self._start_save()

    def cancel(self) -> None:
        """Drop the pending timer without saving. A save already running completes."""
        self._cancel_timer()

    async def aclose(self) -> None:
        """Cancel the timer and wait for any running save (editor teardown)."""
        timer = self._timer
        self._cancel_timer()
        if timer is not None:
            with suppress(CancelledError):
                await timer
        if self._in_flight is not None:
            await wait({self._in_flight})

    def _cancel_timer(self) -> None:
        if self._timer is not None and not self._timer.done():
            self._timer.cancel()
        self._timer = None

    async def _fire_after_delay(self) -> None:
        await sleep(self.delay)
        # Saves outlive the timer; cancelling it never aborts one
        self._start_save()

    def _start_save(self) -> Task[bool]:
        self._in_flight = create_task(self._save_after(self._in_flight))
        return self._in_flight

    async def _save_after(self, previous: Task[bool] | None) -> bool:
        if previous is not None and not previous.done():
            await wait({previous})
        return await self._save_pending()

    async def _save_pending(self) -> bool:
        if self._pending is None or self._pending == self._last_saved:
            return False

        title, content = self._pending
        if not title.strip() or not content.strip():
            # The API rejects blank titles and bodies
            return False

        payload = {"title": title, "content": content, "excerpt": make_excerpt(content)}
        try:
            await self._save(payload)
        except (ApiClientError, HTTPError):
            logger.exception("Auto-save failed")
            return False

        self._last_saved = (title, content)
        self.last_saved_at = utc_now()
        logger.info("Auto-saved")
        return True
