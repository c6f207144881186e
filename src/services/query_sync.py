# src/services/query_sync.py

"""Keeps shop filters, the current location and the listing in step."""

import logging
from collections.abc import Callable

from src.models.filter_state import FilterState, FilterStateStore, SortKey
from src.models.product import Listing
from src.models.result import FetchResult
from src.services.listing_fetcher import ListingFetcher, ListingSource

logger = logging.getLogger("storefront.query_sync")

SHOP_PATH = "/shop"


def shop_location(state: FilterState) -> str:
    """Location that restores ``state`` when opened."""
    query_string = state.to_query_string()
    return f"{SHOP_PATH}?{query_string}" if query_string else SHOP_PATH


class QuerySynchronizer:
    """Reconciles one shop view's filters with its location and listing.

    The initial state is read from the location.  After :meth:`start`,
    every filter change issues exactly one listing request and rewrites
    the location, so a copied location reproduces the same view.
    """

    def __init__(
        self,
        fetch_listing: ListingSource,
        location: str = SHOP_PATH,
        on_listing: Callable[[FetchResult[Listing]], None] | None = None,
        on_location: Callable[[str], None] | None = None,
    ) -> None:
        self.store = FilterStateStore(FilterState.from_location(location))
        self.fetcher = ListingFetcher(fetch_listing, on_result=on_listing)
        self._on_location = on_location
        self._location = location
        self._unsubscribe: Callable[[], None] | None = None

    @property
    def state(self) -> FilterState:
        return self.store.state

    @property
    def location(self) -> str:
        return self._location

    @property
    def listing(self) -> Listing:
        return self.fetcher.listing

    def start(self) -> None:
        """Begin tracking changes and fetch the initial listing."""
        if self._unsubscribe is not None:
            return
        logger.info("Shop opened at %s", self._location)
        self._unsubscribe = self.store.subscribe(self._on_state_change)
        self.fetcher.request(self.store.state)

    def set_field(self, key: str, value: str | SortKey) -> bool:
        """Change one filter; returns ``True`` if it differed."""
        return self.store.set_field(key, value)

    def refresh(self) -> None:
        """Re-issue the listing request for the current filters."""
        self.fetcher.request(self.store.state)

    def close(self) -> None:
        """Stop tracking changes and cancel any in-flight request."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self.fetcher.cancel()

    def _on_state_change(self, state: FilterState) -> None:
        self.fetcher.request(state)
        self._location = shop_location(state)
        if self._on_location is not None:
            self._on_location(self._location)
