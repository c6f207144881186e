# src/services/api_client.py

"""Async JSON client for the storefront REST API."""

import json
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar
from urllib.parse import quote

from curl_cffi import requests as curl_requests

from src.config.settings import Settings
from src.models.order import CheckoutRequest, OrderConfirmation
from src.models.product import Listing, ProductDetail, ProductSummary
from src.models.result import FetchResult

logger = logging.getLogger("storefront.api")

T = TypeVar("T")


class StorefrontAPIError(Exception):
    """Any failed API call: transport error, non-2xx status, bad payload."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class StorefrontClient:
    """Thin async wrapper over the catalog, search and checkout endpoints.

    Every failure surfaces as :class:`StorefrontAPIError`; nothing is
    retried.  The curl_cffi session is created lazily so the client can
    be built outside a running event loop.
    """

    def __init__(
        self,
        base_url: str | None = None,
        session: Any | None = None,
    ) -> None:
        self.settings = Settings()
        self.base_url = (base_url or self.settings.API_BASE_URL).rstrip("/")
        self._session = session

    def _get_session(self) -> Any:
        if self._session is None:
            self._session = curl_requests.AsyncSession(
                impersonate=self.settings.IMPERSONATE_BROWSER
            )
        return self._session

    async def close(self) -> None:
        """Release the underlying HTTP session."""
        if self._session is not None:
            await self._session.close()
            self._session = None

    async def _request(
        self,
        method: str,
        path: str,
        params: dict[str, str] | None = None,
        payload: dict[str, Any] | None = None,
    ) -> Any:
        """Issue one request and return the decoded JSON body."""
        url = f"{self.base_url}{path}"
        session = self._get_session()
        try:
            if method == "GET":
                resp = await session.get(
                    url,
                    params=params,
                    headers=self.settings.DEFAULT_HEADERS,
                    timeout=self.settings.REQUEST_TIMEOUT,
                )
            else:
                resp = await session.post(
                    url,
                    json=payload,
                    headers=self.settings.DEFAULT_HEADERS,
                    timeout=self.settings.REQUEST_TIMEOUT,
                )
        except Exception as exc:
            logger.warning(
                "%s %s failed: %s", method, path, exc, exc_info=True
            )
            raise StorefrontAPIError(f"Network error: {exc}") from exc

        if not 200 <= resp.status_code < 300:
            logger.warning(
                "%s %s returned HTTP %d", method, path, resp.status_code
            )
            raise StorefrontAPIError(
                f"API error (HTTP {resp.status_code})",
                status_code=resp.status_code,
            )

        try:
            data = json.loads(resp.text)
        except ValueError as exc:
            logger.warning("%s %s returned invalid JSON", method, path)
            raise StorefrontAPIError("Malformed API response") from exc

        logger.debug("%s %s -> HTTP %d", method, path, resp.status_code)
        return data

    @staticmethod
    def _expect(data: Any, kind: type, path: str) -> Any:
        if not isinstance(data, kind):
            raise StorefrontAPIError(
                f"Unexpected payload from {path}: {type(data).__name__}"
            )
        return data

    @staticmethod
    def _parse(parser: Callable[[Any], T], data: Any, path: str) -> T:
        """Run a model parser, reporting bad field values as API errors."""
        try:
            return parser(data)
        except (TypeError, ValueError, OverflowError) as exc:
            logger.warning("Malformed payload from %s: %s", path, exc)
            raise StorefrontAPIError("Malformed API response") from exc

    # ── Search ───────────────────────────────────────────

    async def fetch_suggestions(self, query: str) -> list[str]:
        """Return completions for a partially typed search term."""
        path = "/api/search/suggestions"
        data = self._expect(
            await self._request("GET", path, params={"q": query}), list, path
        )
        return [str(s) for s in data]

    # ── Catalog ──────────────────────────────────────────

    async def _product_list(self, path: str) -> list[ProductSummary]:
        data = self._expect(await self._request("GET", path), list, path)
        return self._parse(
            lambda items: [
                ProductSummary.from_dict(item)
                for item in items
                if isinstance(item, dict)
            ],
            data,
            path,
        )

    async def new_arrivals(self) -> list[ProductSummary]:
        return await self._product_list("/api/products/new")

    async def best_sellers(self) -> list[ProductSummary]:
        return await self._product_list("/api/products/best")

    async def list_products(self, params: dict[str, str]) -> Listing:
        """Fetch the listing matching already-serialised filter params."""
        path = "/api/products"
        data = self._expect(
            await self._request("GET", path, params=params), dict, path
        )
        return self._parse(Listing.from_dict, data, path)

    async def get_product(self, product_id: str) -> ProductDetail:
        path = f"/api/products/{quote(product_id, safe='')}"
        data = self._expect(await self._request("GET", path), dict, path)
        return self._parse(ProductDetail.from_dict, data, path)

    async def related_products(
        self,
        category: str,
        exclude_id: str,
        limit: int | None = None,
    ) -> list[ProductSummary]:
        """Other products from ``category``, without ``exclude_id``."""
        listing = await self.list_products(
            {
                "category": category,
                "limit": str(limit or self.settings.RELATED_PRODUCTS_LIMIT),
            }
        )
        return [p for p in listing.items if p.id != exclude_id]

    # ── Orders ───────────────────────────────────────────

    async def checkout(self, request: CheckoutRequest) -> OrderConfirmation:
        """Place a demo order and return its confirmation."""
        path = "/api/checkout"
        data = self._expect(
            await self._request("POST", path, payload=request.to_payload()),
            dict,
            path,
        )
        order_id = data.get("order_id")
        if not order_id:
            raise StorefrontAPIError("Checkout response missing order_id")
        logger.info("Order %s placed for %s", order_id, request.email)
        return OrderConfirmation(order_id=str(order_id))


async def attempt(call: Awaitable[T], fallback: T) -> FetchResult[T]:
    """Await ``call`` and wrap the outcome in a :class:`FetchResult`.

    API failures become ``FetchResult.failure(fallback, message)``.
    """
    try:
        return FetchResult.success(await call)
    except StorefrontAPIError as exc:
        logger.error("Request failed: %s", exc)
        return FetchResult.failure(fallback, str(exc))
