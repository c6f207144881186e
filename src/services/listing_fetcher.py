# src/services/listing_fetcher.py

"""Product listing retrieval where only the newest request wins."""

import asyncio
import logging
from collections.abc import Awaitable, Callable

from src.models.filter_state import FilterState
from src.models.product import EMPTY_LISTING, Listing
from src.models.result import FetchResult

logger = logging.getLogger("storefront.listing")

ListingSource = Callable[[dict[str, str]], Awaitable[Listing]]


class ListingFetcher:
    """Fetches the listing for a FilterState, one request per change.

    Requests carry an increasing sequence number.  A new request cancels
    the one in flight, and any response that still arrives for an older
    sequence is discarded, so the listing always reflects the latest
    filters.  Failures reset the listing to :data:`EMPTY_LISTING`.
    """

    def __init__(
        self,
        fetch: ListingSource,
        on_result: Callable[[FetchResult[Listing]], None] | None = None,
    ) -> None:
        self._fetch = fetch
        self._on_result = on_result
        self._seq = 0
        self._task: asyncio.Task[None] | None = None
        self.listing: Listing = EMPTY_LISTING
        self.last_result: FetchResult[Listing] | None = None

    @property
    def sequence(self) -> int:
        """Sequence number of the most recently issued request."""
        return self._seq

    @property
    def loading(self) -> bool:
        return self._task is not None and not self._task.done()

    def request(self, state: FilterState) -> asyncio.Task[None]:
        """Issue a listing request for ``state``, superseding older ones."""
        self._seq += 1
        seq = self._seq
        params = state.to_query_params()
        self.cancel()
        logger.debug("Listing request #%d params=%s", seq, params)
        self._task = asyncio.get_running_loop().create_task(
            self._run(seq, params)
        )
        return self._task

    def cancel(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()

    async def wait(self) -> FetchResult[Listing] | None:
        """Wait for the in-flight request and return the latest result."""
        if self._task is not None:
            await asyncio.wait([self._task])
        return self.last_result

    async def _run(self, seq: int, params: dict[str, str]) -> None:
        try:
            listing = await self._fetch(params)
            result = FetchResult.success(listing)
        except Exception as exc:
            logger.warning(
                "Listing request #%d failed: %s", seq, exc, exc_info=True
            )
            result = FetchResult.failure(EMPTY_LISTING, str(exc))
        self.apply(seq, result)

    def apply(self, seq: int, result: FetchResult[Listing]) -> bool:
        """Install ``result`` unless a newer request has been issued.

        Returns ``True`` when the result was applied.
        """
        if seq != self._seq:
            logger.info(
                "Discarding stale listing #%d (latest is #%d)", seq, self._seq
            )
            return False
        self.listing = result.value if result.ok else EMPTY_LISTING
        self.last_result = result
        if self._on_result is not None:
            self._on_result(result)
        return True
