# tests/test_product_model.py

"""Tests for the catalog dataclasses."""

import dataclasses
import unittest

from src.config.settings import Settings
from src.models.product import (
    EMPTY_LISTING,
    Listing,
    ProductDetail,
    ProductSummary,
)


class TestProductSummary(unittest.TestCase):
    """ProductSummary parsing and display helpers."""

    def test_from_dict_all_fields(self) -> None:
        """All API fields are mapped."""
        product = ProductSummary.from_dict(
            {
                "id": "p1",
                "title": "ESP32 DevKit",
                "description": "Wi-Fi + BLE board",
                "price": 9.5,
                "images": ["https://cdn.example.com/esp32.jpg"],
                "rating": 4.7,
                "is_new": True,
                "is_best_seller": False,
                "discount_percent": 10,
            }
        )
        self.assertEqual(product.id, "p1")
        self.assertEqual(product.title, "ESP32 DevKit")
        self.assertEqual(product.price, 9.5)
        self.assertEqual(
            product.images, ("https://cdn.example.com/esp32.jpg",)
        )
        self.assertEqual(product.rating, 4.7)
        self.assertTrue(product.is_new)
        self.assertEqual(product.discount_percent, 10)

    def test_from_dict_defaults(self) -> None:
        """Missing fields fall back to empty defaults."""
        product = ProductSummary.from_dict({"_id": "abc", "title": "X"})
        self.assertEqual(product.id, "abc")
        self.assertEqual(product.price, 0.0)
        self.assertEqual(product.images, ())
        self.assertIsNone(product.rating)
        self.assertIsNone(product.discount_percent)

    def test_string_numbers_coerced(self) -> None:
        """Prices and ratings sent as strings become floats."""
        product = ProductSummary.from_dict(
            {"id": 7, "title": "SSD", "price": "49.99", "rating": "4"}
        )
        self.assertEqual(product.id, "7")
        self.assertEqual(product.price, 49.99)
        self.assertEqual(product.rating, 4.0)

    def test_immutable(self) -> None:
        """Summaries are frozen snapshots."""
        product = ProductSummary(id="p", title="T", price=1.0)
        with self.assertRaises(dataclasses.FrozenInstanceError):
            product.price = 2.0  # type: ignore[misc]

    def test_primary_image_placeholder(self) -> None:
        product = ProductSummary(id="p", title="T", price=1.0)
        self.assertEqual(product.primary_image, Settings.PLACEHOLDER_IMAGE)

    def test_badges(self) -> None:
        product = ProductSummary(
            id="p",
            title="T",
            price=1.0,
            is_new=True,
            is_best_seller=True,
            discount_percent=15,
        )
        self.assertEqual(product.badges, ["NEW", "BEST", "-15%"])

    def test_zero_discount_has_no_badge(self) -> None:
        product = ProductSummary.from_dict(
            {"id": "p", "title": "T", "price": 1, "discount_percent": 0}
        )
        self.assertEqual(product.badges, [])

    def test_format_helpers(self) -> None:
        product = ProductSummary(id="p", title="T", price=1299.5, rating=4.25)
        self.assertEqual(product.format_price(), "$1,299.50")
        self.assertEqual(product.format_rating(), "4.2")
        unrated = ProductSummary(id="q", title="T", price=1.0)
        self.assertEqual(unrated.format_rating(), "—")


class TestProductDetail(unittest.TestCase):
    """ProductDetail extends the summary."""

    def test_from_dict_specs_and_category(self) -> None:
        detail = ProductDetail.from_dict(
            {
                "id": "p1",
                "title": "Arduino Uno",
                "price": 25,
                "specs": {"MCU": "ATmega328P", "Pins": 14},
                "reviews_count": 31,
                "category": "Microcontrollers",
            }
        )
        self.assertIsInstance(detail, ProductSummary)
        self.assertEqual(detail.specs, {"MCU": "ATmega328P", "Pins": "14"})
        self.assertEqual(detail.reviews_count, 31)
        self.assertEqual(detail.category, "Microcontrollers")

    def test_non_mapping_specs_ignored(self) -> None:
        detail = ProductDetail.from_dict(
            {"id": "p1", "title": "X", "specs": ["a", "b"]}
        )
        self.assertEqual(detail.specs, {})
        self.assertEqual(detail.reviews_count, 0)

    def test_non_finite_numbers_dropped(self) -> None:
        """Infinite or NaN numbers parse as missing instead of raising."""
        detail = ProductDetail.from_dict(
            {
                "id": "p1",
                "title": "X",
                "price": "inf",
                "rating": float("nan"),
                "reviews_count": float("inf"),
                "discount_percent": "nan",
            }
        )
        self.assertEqual(detail.price, 0.0)
        self.assertIsNone(detail.rating)
        self.assertEqual(detail.reviews_count, 0)
        self.assertIsNone(detail.discount_percent)

    def test_non_list_images_ignored(self) -> None:
        detail = ProductDetail.from_dict({"id": "p1", "title": "X", "images": 5})
        self.assertEqual(detail.images, ())
        self.assertEqual(detail.primary_image, Settings.PLACEHOLDER_IMAGE)


class TestListing(unittest.TestCase):
    """Listing parsing."""

    def test_from_dict(self) -> None:
        listing = Listing.from_dict(
            {
                "items": [
                    {"id": "a", "title": "A", "price": 1},
                    {"id": "b", "title": "B", "price": 2},
                ],
                "total": 40,
            }
        )
        self.assertEqual([p.id for p in listing.items], ["a", "b"])
        self.assertEqual(listing.total, 40)

    def test_total_defaults_to_item_count(self) -> None:
        listing = Listing.from_dict({"items": [{"id": "a", "title": "A"}]})
        self.assertEqual(listing.total, 1)

    def test_empty_listing(self) -> None:
        self.assertEqual(EMPTY_LISTING, Listing(items=(), total=0))
        self.assertEqual(Listing.from_dict({}), EMPTY_LISTING)

    def test_non_list_items_ignored(self) -> None:
        for raw in (5, "abc", {"id": "a"}):
            with self.subTest(items=raw):
                listing = Listing.from_dict({"items": raw, "total": 3})
                self.assertEqual(listing.items, ())
                self.assertEqual(listing.total, 3)


if __name__ == "__main__":
    unittest.main()
