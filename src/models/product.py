# src/models/product.py

"""Catalog data models returned by the storefront API."""

import math
from dataclasses import dataclass, field
from typing import Any

from src.config.settings import Settings


def _as_float(value: Any) -> float | None:
    """Coerce an API number (possibly a string) to float, or ``None``."""
    if value is None or value == "":
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _as_int(value: Any) -> int | None:
    number = _as_float(value)
    return int(number) if number is not None else None


def _summary_fields(data: dict[str, Any]) -> dict[str, Any]:
    """Extract the ProductSummary fields from an API payload."""
    images = data.get("images") or []
    if isinstance(images, str):
        images = [images]
    elif not isinstance(images, list):
        images = []
    discount = _as_int(data.get("discount_percent"))
    return {
        "id": str(data.get("id") or data.get("_id") or ""),
        "title": str(data.get("title") or ""),
        "description": str(data.get("description") or ""),
        "price": _as_float(data.get("price")) or 0.0,
        "images": tuple(str(url) for url in images if url),
        "rating": _as_float(data.get("rating")),
        "is_new": bool(data.get("is_new", False)),
        "is_best_seller": bool(data.get("is_best_seller", False)),
        # A zero discount is not a discount
        "discount_percent": discount or None,
    }


@dataclass(frozen=True)
class ProductSummary:
    """Immutable snapshot of a product as shown in listings and grids."""

    id: str
    title: str
    price: float
    description: str = ""
    images: tuple[str, ...] = ()
    rating: float | None = None
    is_new: bool = False
    is_best_seller: bool = False
    discount_percent: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ProductSummary":
        """Build a summary from an API JSON object."""
        return cls(**_summary_fields(data))

    @property
    def primary_image(self) -> str:
        """First image URL, or the catalog placeholder."""
        return self.images[0] if self.images else Settings.PLACEHOLDER_IMAGE

    @property
    def badges(self) -> list[str]:
        """Short labels for the New / Best / discount flags."""
        labels: list[str] = []
        if self.is_new:
            labels.append("NEW")
        if self.is_best_seller:
            labels.append("BEST")
        if self.discount_percent:
            labels.append(f"-{self.discount_percent}%")
        return labels

    def format_price(self) -> str:
        return f"{Settings.CURRENCY_SYMBOL}{self.price:,.2f}"

    def format_rating(self) -> str:
        return f"{self.rating:.1f}" if self.rating is not None else "—"


@dataclass(frozen=True)
class ProductDetail(ProductSummary):
    """Full product record for the detail view."""

    specs: dict[str, str] = field(default_factory=dict)
    reviews_count: int = 0
    category: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ProductDetail":
        raw_specs = data.get("specs") or {}
        specs = (
            {str(k): str(v) for k, v in raw_specs.items()}
            if isinstance(raw_specs, dict)
            else {}
        )
        return cls(
            **_summary_fields(data),
            specs=specs,
            reviews_count=_as_int(data.get("reviews_count")) or 0,
            category=str(data.get("category") or ""),
        )


@dataclass(frozen=True)
class Listing:
    """A page of product summaries plus the server-side total.

    Replaced wholesale on every successful fetch, never patched.
    """

    items: tuple[ProductSummary, ...] = ()
    total: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Listing":
        raw_items = data.get("items")
        items = tuple(
            ProductSummary.from_dict(item)
            for item in (raw_items if isinstance(raw_items, list) else [])
            if isinstance(item, dict)
        )
        total = _as_int(data.get("total"))
        return cls(items=items, total=total if total is not None else len(items))


EMPTY_LISTING = Listing()
