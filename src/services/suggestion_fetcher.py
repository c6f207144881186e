# src/services/suggestion_fetcher.py

"""Debounced search-as-you-type suggestion lookups."""

import asyncio
import logging
from collections.abc import Awaitable, Callable

from src.config.settings import Settings

logger = logging.getLogger("storefront.suggestions")

SuggestionSource = Callable[[str], Awaitable[list[str]]]


class SuggestionFetcher:
    """Turns keystrokes into at most one live suggestion lookup.

    Each :meth:`update` cancels whatever lookup the previous keystroke
    scheduled.  A non-empty query waits out the quiet period before
    hitting the API; an empty one clears the suggestions at once.
    Results for a query that is no longer current are dropped.
    """

    def __init__(
        self,
        fetch: SuggestionSource,
        on_change: Callable[[list[str]], None] | None = None,
        delay: float | None = None,
    ) -> None:
        self._fetch = fetch
        self._on_change = on_change
        self._delay = Settings.SUGGESTION_DEBOUNCE if delay is None else delay
        self._task: asyncio.Task[None] | None = None
        self.query: str = ""
        self.suggestions: list[str] = []

    def update(self, query: str) -> None:
        """Register a keystroke producing ``query``."""
        self.query = query
        self.cancel()
        if not query:
            self._apply([])
            return
        self._task = asyncio.get_running_loop().create_task(
            self._lookup(query)
        )

    def cancel(self) -> None:
        """Drop any pending or in-flight lookup."""
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    async def wait(self) -> None:
        """Wait for the current lookup, if any, to settle."""
        if self._task is not None:
            await asyncio.wait([self._task])

    async def _lookup(self, query: str) -> None:
        await asyncio.sleep(self._delay)
        try:
            results = list(await self._fetch(query))
        except Exception as exc:
            logger.debug("Suggestion lookup for '%s' failed: %s", query, exc)
            results = []

        if query != self.query:
            logger.debug("Discarding suggestions for stale '%s'", query)
            return
        self._apply(results)

    def _apply(self, suggestions: list[str]) -> None:
        self.suggestions = suggestions
        if self._on_change is not None:
            self._on_change(suggestions)
