# tests/test_cart.py

"""Tests for the observable CartStore."""

import unittest
from unittest.mock import MagicMock

from src.models.product import ProductSummary
from src.services.cart import CartStore


def _p(product_id: str, price: float = 10.0) -> ProductSummary:
    """Create a minimal ProductSummary for testing."""
    return ProductSummary(id=product_id, title=f"Part {product_id}", price=price)


class TestCartStore(unittest.TestCase):
    """CartStore unit tests."""

    def setUp(self) -> None:
        self.cart = CartStore()

    def test_starts_empty(self) -> None:
        self.assertEqual(self.cart.count, 0)
        self.assertEqual(self.cart.lines, [])
        self.assertEqual(self.cart.subtotal, 0)

    def test_add_merges_same_product(self) -> None:
        """Adding a product twice bumps one line's quantity."""
        self.cart.add(_p("a"), 2)
        self.cart.add(_p("a"))
        self.assertEqual(len(self.cart.lines), 1)
        self.assertEqual(self.cart.count, 3)

    def test_subtotal(self) -> None:
        self.cart.add(_p("a", 2.5), 2)
        self.cart.add(_p("b", 10.0))
        self.assertAlmostEqual(self.cart.subtotal, 15.0)

    def test_invalid_quantity(self) -> None:
        with self.assertRaises(ValueError):
            self.cart.add(_p("a"), 0)

    def test_listeners_receive_count(self) -> None:
        """Every mutation reports the new total quantity."""
        listener = MagicMock()
        self.cart.subscribe(listener)
        self.cart.add(_p("a"), 2)
        self.cart.add(_p("b"))
        self.cart.remove("a")
        self.cart.clear()
        self.assertEqual(
            [c.args[0] for c in listener.call_args_list], [2, 3, 1, 0]
        )

    def test_remove_missing_is_noop(self) -> None:
        listener = MagicMock()
        self.cart.subscribe(listener)
        self.assertFalse(self.cart.remove("nope"))
        listener.assert_not_called()

    def test_clear_empty_does_not_notify(self) -> None:
        listener = MagicMock()
        self.cart.subscribe(listener)
        self.cart.clear()
        listener.assert_not_called()

    def test_unsubscribe(self) -> None:
        listener = MagicMock()
        unsubscribe = self.cart.subscribe(listener)
        unsubscribe()
        self.cart.add(_p("a"))
        listener.assert_not_called()

    def test_checkout_items(self) -> None:
        self.cart.add(_p("a", 3.0), 2)
        self.assertEqual(
            self.cart.to_checkout_items(),
            [{"product_id": "a", "title": "Part a", "quantity": 2, "price": 3.0}],
        )


if __name__ == "__main__":
    unittest.main()
